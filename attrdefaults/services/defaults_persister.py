"""
Save model attribute values as per-user defaults and restore them later.

The persister keeps one name/value map per model type in the user's state
store, under ``state_key_prefix + lower-cased model class name``::

    persister = DefaultsPersister(["name", "status", "project_id"], store)
    persister.save_as_defaults(ticket)              # all configured attributes
    persister.save_as_defaults(ticket, "name")      # merge one attribute
    persister.load_defaults(other_ticket)
    persister.reset_defaults(ticket, ["status"])

If nothing was saved yet, the model's optional ``attribute_defaults()`` method
supplies the initial map.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Optional, Protocol, Union

from attrdefaults.core.config import get_settings
from attrdefaults.domain.model import PersistableModel

log = logging.getLogger(__name__)

Selector = Union[None, str, Iterable[str]]


class StateStore(Protocol):
    def get(self, key: str) -> Optional[dict[str, Any]]:
        ...

    def set(self, key: str, value: dict[str, Any]) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class DefaultsError(Exception):
    """Base exception for the defaults workflow."""


class InvalidAttributeError(DefaultsError):
    """Raised when a single attribute name is not configured for save/load."""

    _MESSAGES = {
        "save": 'Attribute "{}" can not be saved as default.',
        "load": 'Attribute "{}" can not be loaded from defaults.',
    }

    def __init__(self, attribute: Any, operation: str):
        template = self._MESSAGES.get(operation, 'Attribute "{}" is not configured.')
        super().__init__(template.format(attribute))
        self.attribute = attribute
        self.operation = operation


class DefaultsPersister:
    """Moves whitelisted attribute values between a model and a state store."""

    def __init__(
        self,
        attributes: Iterable[str],
        store: StateStore,
        *,
        state_key_prefix: str | None = None,
        safe_only: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.attributes: tuple[str, ...] = tuple(dict.fromkeys(attributes))
        self.store = store
        self.state_key_prefix = (
            settings.defaults_state_key_prefix if state_key_prefix is None else state_key_prefix
        )
        self.safe_only = settings.defaults_safe_only if safe_only is None else bool(safe_only)

    def state_key(self, model: PersistableModel) -> str:
        return self.state_key_prefix + type(model).__name__.lower()

    def _configured(self, attribute: str, operation: str) -> str:
        if not isinstance(attribute, str) or attribute not in self.attributes:
            raise InvalidAttributeError(attribute, operation)
        return attribute

    @staticmethod
    def _is_single(attribute: Selector) -> bool:
        return isinstance(attribute, (str, bytes)) or not isinstance(attribute, Iterable)

    def _whitelisted(self, names: Iterable[str]) -> list[str]:
        wanted = set(names)
        return [name for name in self.attributes if name in wanted]

    def save_as_defaults(self, model: PersistableModel, attribute: Selector = None) -> None:
        """Save current attribute value(s) of ``model`` as defaults.

        ``None`` replaces the stored map with every configured attribute. A
        single name or a list of names is merged into what is already stored;
        list entries that are not configured are ignored.
        """
        if attribute is None:
            defaults = model.get_attributes(self.attributes)
        elif self._is_single(attribute):
            name = self._configured(attribute, "save")
            defaults = self._load_persistent(model)
            defaults[name] = model.get_attribute(name)
        else:
            defaults = self._load_persistent(model)
            defaults.update(model.get_attributes(self._whitelisted(attribute)))
        self._save_persistent(model, defaults)

    def load_defaults(
        self,
        model: PersistableModel,
        attribute: Selector = None,
        safe_only: bool | None = None,
    ) -> None:
        """Apply stored defaults to ``model``.

        A single name that was never stored is set to ``None``. With
        ``safe_only`` (per call, else the configured flag) values go through
        ``model.set_attributes`` so attributes unsafe in the current scenario
        are skipped.
        """
        if attribute is not None and self._is_single(attribute):
            name = self._configured(attribute, "load")
            values = {name: self._load_persistent(model).get(name)}
        else:
            defaults = self._load_persistent(model)
            if attribute is None:
                values = defaults
            else:
                wanted = set(attribute)
                values = {name: value for name, value in defaults.items() if name in wanted}

        effective_safe_only = self.safe_only if safe_only is None else safe_only
        if effective_safe_only:
            model.set_attributes(values, safe_only=True)
        else:
            # every name must resolve on the model before the first assignment
            model.get_attributes(list(values))
            for name, value in values.items():
                model.set_attribute(name, value)

    def reset_defaults(self, model: PersistableModel, attribute: Selector = None) -> None:
        """Forget all stored defaults, or only the given attribute(s).

        A full reset removes the entry so the next load falls back to
        ``attribute_defaults()`` again; a partial reset keeps the (possibly
        empty) map.
        """
        key = self.state_key(model)
        if attribute is None:
            self.store.delete(key)
            log.debug('Reset default attributes "%s"', key)
            return
        names = [attribute] if self._is_single(attribute) else list(attribute)
        defaults = self._load_persistent(model)
        for name in names:
            defaults.pop(name, None)
        self._save_persistent(model, defaults)

    def get_defaults(self, model: PersistableModel) -> dict[str, Any]:
        """Return the defaults that a full load would apply, without applying them."""
        return self._load_persistent(model)

    def _load_persistent(self, model: PersistableModel) -> dict[str, Any]:
        key = self.state_key(model)
        stored = self.store.get(key)
        if stored is None:
            hook = getattr(model, "attribute_defaults", None)
            stored = (hook() or {}) if hook is not None else {}
        defaults = {name: value for name, value in stored.items() if name in self.attributes}
        log.debug('Loaded default attributes "%s": %r', key, defaults)
        return defaults

    def _save_persistent(self, model: PersistableModel, defaults: dict[str, Any]) -> None:
        key = self.state_key(model)
        self.store.set(key, defaults)
        log.debug('Saved default attributes "%s": %r', key, defaults)
