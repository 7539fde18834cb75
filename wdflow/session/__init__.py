"""Session handle and script return helpers."""

from .handle import SessionHandle
from .scriptret import ScriptRet

__all__ = ["ScriptRet", "SessionHandle"]
