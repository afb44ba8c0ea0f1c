from dataclasses import dataclass
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class JsonValue:
    """Base of the closed set of JSON value kinds below."""

    def to_python(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class JsonNull(JsonValue):
    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class JsonBool(JsonValue):
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class JsonNumber(JsonValue):
    value: float

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class JsonString(JsonValue):
    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class JsonArray(JsonValue):
    items: Tuple[JsonValue, ...] = ()

    def __post_init__(self):
        # Accept any iterable, store a tuple
        object.__setattr__(self, 'items', tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def to_python(self) -> List[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JsonObject(JsonValue):
    """Key/value pairs in source order. Keys may repeat."""
    pairs: Tuple[Tuple[str, JsonValue], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'pairs', tuple((k, v) for k, v in self.pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def keys(self) -> List[str]:
        return [k for k, _ in self.pairs]

    def get(self, key: str) -> Optional[JsonValue]:
        """First value bound to `key`, or None."""
        for k, v in self.pairs:
            if k == key:
                return v
        return None

    def to_python(self) -> dict:
        # Later duplicates overwrite earlier ones
        return {k: v.to_python() for k, v in self.pairs}
