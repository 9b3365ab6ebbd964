"""Core value types shared by descriptors, evaluation and reporting."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import InvalidArgument


class MessageMatch(enum.Enum):
    """How an expected exception message is compared with the actual one."""

    EXACT = "exact"
    CONTAINS = "contains"
    STARTS_WITH = "startswith"
    REGEX = "regex"

    @classmethod
    def parse(cls, value: "MessageMatch | str") -> "MessageMatch":
        if isinstance(value, MessageMatch):
            return value
        text = str(value).strip().lower().replace("_", "")
        for member in cls:
            if member.value == text:
                return member
        choices = ", ".join(member.value for member in cls)
        raise InvalidArgument(f"Unknown message match '{value}'. Expected one of: {choices}")


class RunState(enum.Enum):
    RUNNABLE = "Runnable"
    NOT_RUNNABLE = "NotRunnable"
    IGNORED = "Ignored"


class PropertyNames:
    """Well-known property keys."""

    TIMEOUT = "Timeout"
    REQUIRES_THREAD = "RequiresThread"
    DESCRIPTION = "Description"
    CATEGORY = "Category"
    SKIP_REASON = "SkipReason"


class PropertyBag:
    """Multi-valued string-keyed properties attached to a test."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self._items: Dict[str, List[Any]] = {}
        for key, value in (initial or {}).items():
            self.add(key, value)

    def add(self, key: str, value: Any) -> None:
        self._items.setdefault(key, []).append(value)

    def set(self, key: str, value: Any) -> None:
        self._items[key] = [value]

    def get(self, key: str, default: Any = None) -> Any:
        values = self._items.get(key)
        if not values:
            return default
        return values[0]

    def get_all(self, key: str) -> Tuple[Any, ...]:
        return tuple(self._items.get(key, ()))

    def items(self) -> Iterator[Tuple[str, Any]]:
        for key, values in self._items.items():
            for value in values:
                yield key, value

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


def full_type_name(kind: type) -> str:
    """Return ``module.QualName`` for ``kind``; builtins use the bare name."""

    module = getattr(kind, "__module__", None)
    qualname = getattr(kind, "__qualname__", kind.__name__)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


@dataclass(frozen=True)
class MethodRef:
    """Handle to a callable member as seen through a particular class.

    ``declaring_type`` is the class whose body defines the member and
    ``reflected_type`` is the class it was looked up through. They differ for
    inherited members.
    """

    name: str
    function: Optional[Callable[..., Any]]
    declaring_type: type
    reflected_type: type
    kind: str = "instance"  # "instance", "class" or "static"

    @classmethod
    def from_class(cls, reflected_type: type, name: str) -> "MethodRef":
        for klass in reflected_type.__mro__:
            if name in vars(klass):
                raw = vars(klass)[name]
                break
        else:
            raise InvalidArgument(f"{full_type_name(reflected_type)} has no member named '{name}'")
        if isinstance(raw, staticmethod):
            return cls(name, raw.__func__, klass, reflected_type, kind="static")
        if isinstance(raw, classmethod):
            return cls(name, raw.__func__, klass, reflected_type, kind="class")
        return cls(name, raw, klass, reflected_type)

    @property
    def declaring_type_id(self) -> str:
        return full_type_name(self.declaring_type)

    @property
    def reflected_type_id(self) -> str:
        return full_type_name(self.reflected_type)

    @property
    def is_inherited(self) -> bool:
        return self.declaring_type_id != self.reflected_type_id

    @property
    def is_resolved(self) -> bool:
        return self.function is not None and callable(self.function)

    @property
    def needs_instance(self) -> bool:
        return self.kind == "instance"

    def invoke(self, instance: Any = None, *args: Any) -> Any:
        if not self.is_resolved:
            raise InvalidArgument(f"Method '{self.name}' is not resolved to a callable")
        assert self.function is not None
        if self.kind == "static":
            return self.function(*args)
        if self.kind == "class":
            return self.function(self.reflected_type, *args)
        if instance is None:
            raise InvalidArgument(f"Method '{self.name}' requires an instance of {self.reflected_type_id}")
        return self.function(instance, *args)
