"""
Built-in checks.

Contains:
- EmailDisclosure - email адреса в теле страницы
- PrivateIP - внутренние IP адреса в теле страницы
- InsecureCookies - cookies без secure/httponly
- XFrameOptions - отсутствует заголовок X-Frame-Options
- ReflectedParams - значения параметров отражаются в теле
"""

from .email_disclosure import EmailDisclosure
from .private_ip import PrivateIP
from .insecure_cookies import InsecureCookies
from .x_frame_options import XFrameOptions
from .reflected_params import ReflectedParams

BUILTIN_CHECKS = [
    EmailDisclosure,
    PrivateIP,
    InsecureCookies,
    XFrameOptions,
    ReflectedParams,
]

__all__ = [
    "BUILTIN_CHECKS",
    "EmailDisclosure",
    "PrivateIP",
    "InsecureCookies",
    "XFrameOptions",
    "ReflectedParams",
]
