"""Errors raised while talking to the mirai-api-http service."""


class MiraiApiHttpError(RuntimeError):
    """An error status returned by mirai-api-http."""

    def __init__(self, code, message):
        super().__init__(f"mirai-api-http 错误: {message}")
        self.code = code
        self.message = message


class NetworkError(RuntimeError):
    """The service could not be reached."""

    def __init__(self):
        super().__init__("网络错误.")