# Ensure registration happens by importing modules
from .base import Catalog, CatalogEntry, CatalogError, Dimension, EntryKind, catalog_registry, get_catalog  # noqa
from . import drywall, painting  # noqa
