# src/folio_auditor/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, Callable, Optional, Set, Tuple

from .core import AnalyzerDefinition, Analyzer

logger = logging.getLogger(__name__)


class AnalyzerRegistry:
    """
    Central registry for the dimension analyzers.

    Dynamically discovers modules in the 'folio_auditor.analyzers' package that
    expose a `DEFINITION` attribute (instance of `AnalyzerDefinition`).
    """

    _analyzers: Dict[str, Analyzer] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        if cls._loaded:
            return

        try:
            import folio_auditor.analyzers as analyzers_pkg

            for _, name, _ in pkgutil.iter_modules(analyzers_pkg.__path__):
                full_name = f"folio_auditor.analyzers.{name}"
                try:
                    module = importlib.import_module(full_name)
                    defn = getattr(module, "DEFINITION", None)
                    if isinstance(defn, AnalyzerDefinition):
                        cls._analyzers[defn.dimension] = defn.validate
                        logger.debug(f"Analyzer loaded: {defn.dimension}")
                except Exception as e:
                    logger.error(f"Error loading analyzer module {name}: {e}")

            cls._loaded = True
        except ImportError as e:
            logger.error(f"Could not find analyzers package: {e}")

    @classmethod
    def get_all(cls) -> Dict[str, Analyzer]:
        return dict(cls._analyzers)


# Fixer signature: (FixContext, ValidationIssue) -> List[str] (human-readable fix log lines)
Fixer = Callable[..., list]


def fix_spec(dimension: str, kinds: list):
    """
    Decorator declaring which issue kinds (within one dimension) a fixer repairs.
    Facilitates auto-discovery by the FixerRegistry.
    """
    def decorator(func):
        func.fix_dimension = dimension
        func.fix_kinds = kinds
        return func
    return decorator


class FixerRegistry:
    """
    Lookup table mapping (dimension, issue kind) to a repair function.

    Scans every module in 'folio_auditor.fixers' for functions tagged with
    @fix_spec. Kinds without an entry are skipped by the AutoFixController.
    """

    _fixers: Dict[Tuple[str, str], Fixer] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        if cls._loaded:
            return

        try:
            import folio_auditor.fixers as fixers_pkg

            for _, name, _ in pkgutil.iter_modules(fixers_pkg.__path__):
                full_name = f"folio_auditor.fixers.{name}"
                try:
                    module = importlib.import_module(full_name)
                    for attr in vars(module).values():
                        if callable(attr) and hasattr(attr, "fix_kinds"):
                            for kind in attr.fix_kinds:
                                cls._fixers[(attr.fix_dimension, kind)] = attr
                    logger.debug(f"Fixer module loaded: {name}")
                except Exception as e:
                    logger.error(f"Error loading fixer module {name}: {e}")

            cls._loaded = True
        except ImportError as e:
            logger.error(f"Could not find fixers package: {e}")

    @classmethod
    def get(cls, dimension: str, kind: str) -> Optional[Fixer]:
        return cls._fixers.get((dimension, kind))

    @classmethod
    def get_all_kinds(cls) -> Set[Tuple[str, str]]:
        return set(cls._fixers.keys())
