from sqlalchemy import Enum as SAEnum


def status_enum(enum_cls, name: str) -> SAEnum:
    """Column type storing ``enum_cls`` members by their lower-case value.

    Stored as a plain string column.
    Unknown strings are rejected on write.
    """
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
        length=max(len(m.value) for m in enum_cls),
    )
