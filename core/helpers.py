import uuid


def generate_record_id() -> str:
    """Opaque id for patients, visits and assessments."""
    return str(uuid.uuid4())


def visit_label(index: int, total: int) -> str:
    """Archive number shown on the history page, oldest visit is No.1."""
    return f"Record No.{total - index}"
