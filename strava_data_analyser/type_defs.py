"""类型定义"""

from dataclasses import dataclass, field
from typing import Optional, TypedDict


@dataclass(frozen=True)
class StravaCredentials:
    """Strava 应用凭据"""

    client_secret: str = field(repr=False)
    client_id: int
    authorization_code: str = field(repr=False)


@dataclass(frozen=True)
class AccessToken:
    """OAuth 授权码交换得到的访问令牌"""

    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    expires_at: Optional[int] = None


class EnvConfig(TypedDict, total=False):
    """环境配置字典类型"""

    client_secret: Optional[str]
    client_id: Optional[str]
    authorization_code: Optional[str]
