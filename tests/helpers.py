from streettrees.records import TreeRecord


def make_record(tree_id, species, borough="Manhattan", **kwargs):
    """Build a valid TreeRecord, overriding any field through kwargs."""
    fields = dict(
        tree_id=tree_id,
        diameter=10,
        status="alive",
        health="good",
        species=species,
        zipcode=10001,
        borough=borough,
        x=1000000.0,
        y=200000.0,
    )
    fields.update(kwargs)
    return TreeRecord(**fields)
