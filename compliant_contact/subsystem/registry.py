from __future__ import annotations

import logging

from compliant_contact.errors import ConfigurationError, InvalidArgumentError
from compliant_contact.generators.base import ForceGenerator
from compliant_contact.types import NO_CONTACT_TYPE, ContactTypeId

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Exclusive owner of one force generator per contact type, plus a default.

    Registration belongs to setup; lookups during evaluation never write.
    """

    def __init__(self) -> None:
        self._generators: dict[ContactTypeId, ForceGenerator] = {}
        self._default: ForceGenerator | None = None

    def register(self, contact_type_id: ContactTypeId, generator: ForceGenerator) -> None:
        if contact_type_id == NO_CONTACT_TYPE:
            raise InvalidArgumentError(
                "contact type 0 is reserved; use register_default() for the fallback generator"
            )
        if generator.contact_type_id not in (contact_type_id, NO_CONTACT_TYPE):
            raise InvalidArgumentError(
                f"{type(generator).__name__} handles contact type {generator.contact_type_id}, "
                f"not {contact_type_id}"
            )
        previous = self._generators.get(contact_type_id)
        if previous is generator:
            return
        generator.attach(self)
        if previous is not None:
            logger.debug(
                f"Replacing {type(previous).__name__} with {type(generator).__name__} "
                f"for contact type {contact_type_id}"
            )
            previous.detach()
        self._generators[contact_type_id] = generator

    def register_default(self, generator: ForceGenerator) -> None:
        previous = self._default
        if previous is generator:
            return
        generator.attach(self)
        if previous is not None:
            logger.debug(f"Replacing default generator {type(previous).__name__}")
            previous.detach()
        self._default = generator

    def lookup(self, contact_type_id: ContactTypeId) -> ForceGenerator:
        generator = self._generators.get(contact_type_id, self._default)
        if generator is None:
            raise ConfigurationError(
                f"no force generator registered for contact type {contact_type_id} "
                "and no default generator"
            )
        return generator

    def has(self, contact_type_id: ContactTypeId) -> bool:
        return contact_type_id in self._generators

    def has_default(self) -> bool:
        return self._default is not None

    def default(self) -> ForceGenerator:
        if self._default is None:
            raise ConfigurationError("no default force generator registered")
        return self._default

    def __len__(self) -> int:
        return len(self._generators)
