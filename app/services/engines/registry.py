from typing import Type

from app.core.exceptions import EngineNotFoundError
from app.models.schemas import CipherFamily, CipherType
from app.services.engines.base import CipherEngine


class EngineRegistry:
    """
    Lookup of cipher engines by type or family.

    Engine classes register themselves with the ``register`` decorator when
    their module is imported; instances are created on first lookup and
    shared afterwards.
    """

    _engines: dict[CipherType, Type[CipherEngine]] = {}
    _instances: dict[CipherType, CipherEngine] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherEngine]) -> Type[CipherEngine]:
        """
        Class decorator adding an engine under its ``cipher_type``.

            @EngineRegistry.register
            class VigenereEngine(CipherEngine):
                ...
        """
        cls._engines[engine_class.cipher_type] = engine_class
        return engine_class

    def get_engine(self, cipher_type: CipherType) -> CipherEngine | None:
        """Shared engine instance for cipher_type, or None when unregistered."""
        if cipher_type not in self._engines:
            return None

        if cipher_type not in self._instances:
            self._instances[cipher_type] = self._engines[cipher_type]()

        return self._instances[cipher_type]

    def require_engine(self, cipher_type: CipherType) -> CipherEngine:
        """Like get_engine, but raise EngineNotFoundError when missing."""
        engine = self.get_engine(cipher_type)
        if engine is None:
            raise EngineNotFoundError(str(cipher_type.value))
        return engine

    def get_engines_by_family(self, family: CipherFamily) -> list[CipherEngine]:
        return [
            self.get_engine(cipher_type)
            for cipher_type, engine_class in self._engines.items()
            if engine_class.cipher_family == family
        ]

    @classmethod
    def list_registered(cls) -> list[CipherType]:
        return list(cls._engines.keys())

    @classmethod
    def is_registered(cls, cipher_type: CipherType) -> bool:
        return cipher_type in cls._engines


def _load_engines() -> None:
    """Import the engine modules so their classes register."""
    from app.services.engines.monoalphabetic import caesar  # noqa: F401
    from app.services.engines.polyalphabetic import vigenere  # noqa: F401


_load_engines()
