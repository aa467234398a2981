"""统一的异常类型定义"""


class StravaDataAnalyserError(Exception):
    """基础异常类"""

    pass


class ConfigurationError(StravaDataAnalyserError):
    """配置错误（缺少或无效的 Strava 凭据）"""

    pass


class ApiError(StravaDataAnalyserError):
    """Strava API 调用相关错误"""

    pass


class AuthenticationError(ApiError):
    """认证错误（OAuth 授权码交换失败或令牌被拒绝）"""

    pass


class NotFoundError(ApiError):
    """请求的对象在 Strava 上不存在"""

    def __init__(self, message: str, resource: str | None = None):
        super().__init__(message)
        self.resource = resource


class NetworkError(ApiError):
    """网络传输错误（连接失败、超时或上游异常响应）"""

    pass
