# src/pagegrader/rubric/registry.py
import importlib
import logging
import pkgutil
from typing import Dict, List

from pagegrader.errors import UnknownProfileError
from .core import RubricDefinition

logger = logging.getLogger(__name__)


class RubricRegistry:
    """
    Central registry for rubric profiles.

    Dynamically discovers RubricDefinition modules from the
    'pagegrader.rubric.profiles' package.
    """

    _profiles: Dict[str, RubricDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers every module in `pagegrader.rubric.profiles` that exposes a
        `DEFINITION` attribute (instance of `RubricDefinition`).
        """
        if cls._loaded:
            return

        try:
            import pagegrader.rubric.profiles as profiles_pkg

            for _, name, _ in pkgutil.iter_modules(profiles_pkg.__path__):
                full_name = f"pagegrader.rubric.profiles.{name}"
                try:
                    module = importlib.import_module(full_name)
                    if hasattr(module, "DEFINITION") and isinstance(module.DEFINITION, RubricDefinition):
                        cls.register(module.DEFINITION)
                except Exception as e:
                    logger.error(f"Error loading rubric module {name}: {e}")

            cls._loaded = True
        except ImportError as e:
            logger.error(f"Could not find profiles package: {e}")

    @classmethod
    def register(cls, definition: RubricDefinition) -> None:
        if definition.name in cls._profiles:
            logger.warning("Rubric profile '%s' registered twice; keeping the latest.", definition.name)
        cls._profiles[definition.name] = definition
        logger.debug(f"Rubric loaded: {definition.name} ({len(definition.checks)} checks)")

    @classmethod
    def get_profile(cls, name: str) -> RubricDefinition:
        """Returns the profile registered under `name`."""
        cls.discover()
        try:
            return cls._profiles[name]
        except KeyError:
            raise UnknownProfileError(name, cls.get_profile_names()) from None

    @classmethod
    def get_profile_names(cls) -> List[str]:
        cls.discover()
        return sorted(cls._profiles)

    @classmethod
    def reset(cls) -> None:
        """Forgets every registered profile. Next lookup rediscovers them."""
        cls._profiles = {}
        cls._loaded = False
