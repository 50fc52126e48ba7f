class ConfigurationError(ValueError):
    """잘못된 GRFM 파라미터, 첫 프레임 처리 전에 발생"""
