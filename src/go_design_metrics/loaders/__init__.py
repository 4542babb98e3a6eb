"""Package loaders for go-design-metrics."""

from ..core.exceptions import ConfigError
from .base import LoaderConfig, PackageLoader
from .go_list import GoListPackageLoader
from .source import SourcePackageLoader

_LOADERS: dict[str, type] = {
    SourcePackageLoader.name: SourcePackageLoader,
    GoListPackageLoader.name: GoListPackageLoader,
}


def get_package_loader(name: str) -> PackageLoader:
    """Create the package loader registered under `name`.

    Raises:
        ConfigError: If no loader has that name
    """
    try:
        loader_class = _LOADERS[name]
    except KeyError:
        raise ConfigError(
            f"unknown loader '{name}' (expected one of: {', '.join(sorted(_LOADERS))})",
            context={"loader": name},
        ) from None
    return loader_class()


__all__ = [
    "GoListPackageLoader",
    "LoaderConfig",
    "PackageLoader",
    "SourcePackageLoader",
    "get_package_loader",
]
