from ulid import ULID


def new_ulid(prefix: str | None = None) -> str:
    value = str(ULID()).lower()
    return f"{prefix}{value}" if prefix else value


def new_client_id() -> str:
    return new_ulid()


def new_stream_id() -> str:
    return new_ulid()
