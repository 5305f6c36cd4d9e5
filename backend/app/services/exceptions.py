"""
Service-layer exceptions
Services signal validation failures with ValueError; a missing entity is
the NotFoundError subclass so routers can answer 404 instead of 400.
"""


class NotFoundError(ValueError):
    """Referenced entity does not exist"""

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class NegativeRateRejected(Exception):
    """Quote refused because a computed rate went below zero"""

    def __init__(self, warnings):
        stages = ", ".join(w.stage for w in warnings)
        super().__init__(f"Quote rejected: negative rate at {stages}")
        self.warnings = warnings


def reject_nulls(update_data: dict, required) -> None:
    """Raise ValueError when a partial update sets a required column to null"""
    nulls = [name for name in required if name in update_data and update_data[name] is None]
    if nulls:
        raise ValueError(f"{', '.join(nulls)} cannot be null")
