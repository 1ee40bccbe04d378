import uuid


def new_condition_id() -> str:
    return f"COND-{uuid.uuid4().hex[:12]}"
