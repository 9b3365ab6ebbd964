"""Decorators recording test metadata on fixture classes and their methods."""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TypeVar

from casekit.core.models import MessageMatch, PropertyNames

T = TypeVar("T")

METADATA_ATTR = "__casekit__"


def read_metadata(obj: Any) -> Dict[str, Any]:
    """Return metadata recorded directly on ``obj`` (never inherited)."""

    target = _unwrap(obj)
    data = getattr(target, "__dict__", {}).get(METADATA_ATTR)
    return data if isinstance(data, dict) else {}


def _metadata(obj: Any) -> Dict[str, Any]:
    target = _unwrap(obj)
    data = target.__dict__.get(METADATA_ATTR)
    if data is None:
        data = {}
        setattr(target, METADATA_ATTR, data)
    return data


def _unwrap(obj: Any) -> Any:
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def _add_property(obj: Any, key: str, value: Any) -> None:
    _metadata(obj).setdefault("properties", []).append((key, value))


def test(func: T) -> T:
    """Mark a method as a test."""

    _metadata(func)["test"] = True
    return func


test.__test__ = False  # type: ignore[attr-defined]


def expected_exception(
    exception: "type | str | None" = None,
    *,
    message: Optional[str] = None,
    match: "MessageMatch | str" = MessageMatch.EXACT,
    user_message: Optional[str] = None,
    handler: Optional[str] = None,
) -> Callable[[T], T]:
    """Mark a test that must raise ``exception``.

    ``exception`` may be a class or its fully-qualified name. ``handler``
    names a method of the fixture that receives the raised exception.
    """

    mode = MessageMatch.parse(match)

    def decorate(func: T) -> T:
        meta = _metadata(func)
        meta["test"] = True
        meta["expected_exception"] = {
            "exception": exception,
            "message": message,
            "match": mode,
            "user_message": user_message,
            "handler": handler,
        }
        return func

    return decorate


def expected_result(value: Any) -> Callable[[T], T]:
    def decorate(func: T) -> T:
        meta = _metadata(func)
        meta["test"] = True
        meta["expected_result"] = value
        return func

    return decorate


def timeout(milliseconds: float) -> Callable[[T], T]:
    """Set the ``Timeout`` property on a test or a whole fixture."""

    def decorate(obj: T) -> T:
        _add_property(obj, PropertyNames.TIMEOUT, milliseconds)
        return obj

    return decorate


def requires_thread(obj: T) -> T:
    _add_property(obj, PropertyNames.REQUIRES_THREAD, True)
    return obj


def category(name: str) -> Callable[[T], T]:
    def decorate(obj: T) -> T:
        _add_property(obj, PropertyNames.CATEGORY, name)
        return obj

    return decorate


def description(text: str) -> Callable[[T], T]:
    def decorate(obj: T) -> T:
        _add_property(obj, PropertyNames.DESCRIPTION, text)
        return obj

    return decorate


def ignore(reason: str) -> Callable[[T], T]:
    def decorate(obj: T) -> T:
        _metadata(obj)["ignore"] = reason
        return obj

    return decorate
