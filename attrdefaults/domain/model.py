"""Model contract consumed by the defaults persister, plus a plain base class."""
from __future__ import annotations

from typing import Any, Callable, ClassVar, Iterable, Mapping, Optional, Protocol


class UnknownAttributeError(AttributeError):
    """Raised when a name is not one of the model's declared attributes."""

    def __init__(self, model_name: str, attribute: str):
        super().__init__(f'{model_name} has no attribute "{attribute}".')
        self.model_name = model_name
        self.attribute = attribute


class PersistableModel(Protocol):
    """What the persister needs from a model.

    Models may also define ``attribute_defaults()`` returning name/value pairs;
    it is used only when nothing has been stored for the model type yet.
    """

    def get_attributes(self, names: Iterable[str]) -> dict[str, Any]:
        ...

    def get_attribute(self, name: str) -> Any:
        ...

    def set_attribute(self, name: str, value: Any) -> None:
        ...

    def set_attributes(self, values: Mapping[str, Any], safe_only: bool = True) -> None:
        ...


class FormModel:
    """Minimal model with a closed set of fields and per-scenario safe attributes.

    ``safe_attributes`` maps a scenario name to the names that may be
    mass-assigned in it; names under ``"*"`` are safe in every scenario.
    """

    attribute_names: ClassVar[tuple[str, ...]] = ()
    safe_attributes: ClassVar[Mapping[str, Iterable[str]]] = {}
    attribute_defaults: ClassVar[Optional[Callable[[], Mapping[str, Any]]]] = None

    _reserved_names: ClassVar[frozenset[str]] = frozenset({"scenario", "_values"})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        clashes = cls._reserved_names.intersection(cls.attribute_names)
        if clashes:
            raise TypeError(f"{cls.__name__} can not declare reserved attribute(s): {', '.join(sorted(clashes))}")

    def __init__(self, scenario: str = "", **values: Any) -> None:
        object.__setattr__(self, "_values", dict.fromkeys(self.attribute_names))
        self.scenario = scenario
        for name, value in values.items():
            self.set_attribute(name, value)

    def _check(self, name: str) -> None:
        if name not in self._values:
            raise UnknownAttributeError(type(self).__name__, name)

    def __getattr__(self, name: str) -> Any:
        values = self.__dict__.get("_values")
        if values is not None and name in values:
            return values[name]
        raise AttributeError(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.attribute_names:
            self._values[name] = value
        else:
            super().__setattr__(name, value)

    def get_attribute(self, name: str) -> Any:
        self._check(name)
        return self._values[name]

    def set_attribute(self, name: str, value: Any) -> None:
        self._check(name)
        self._values[name] = value

    def get_attributes(self, names: Iterable[str] | None = None) -> dict[str, Any]:
        if names is None:
            return dict(self._values)
        return {name: self.get_attribute(name) for name in names}

    def safe_attribute_names(self) -> set[str]:
        """Names that may be mass-assigned in the current scenario."""
        names = set(self.safe_attributes.get("*", ()))
        names.update(self.safe_attributes.get(self.scenario, ()))
        return names & set(self.attribute_names)

    def set_attributes(self, values: Mapping[str, Any], safe_only: bool = True) -> None:
        allowed = self.safe_attribute_names() if safe_only else set(self.attribute_names)
        for name, value in values.items():
            if name in allowed:
                self._values[name] = value
