"""Exception types raised by the street tree index and its loaders."""


class StreetTreesError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgument(StreetTreesError, ValueError):
    """A tree operation received None instead of a value."""


class EmptyCollection(StreetTreesError, LookupError):
    """first()/last() was called on a tree holding no values."""


class SchemaViolation(StreetTreesError, ValueError):
    """A parsed line has the wrong field count or an out-of-domain field."""


class IntegrityViolation(StreetTreesError):
    """Two records share a tree id but not a species name."""

    def __init__(self, tree_id, existing_species, new_species):
        self.tree_id = tree_id
        self.existing_species = existing_species
        self.new_species = new_species
        super().__init__(
            f"tree id {tree_id} already stored as '{existing_species}', "
            f"refusing '{new_species}'"
        )
