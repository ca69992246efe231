from credstrategy.errors import ConfigurationError


def validate_work_factor(work_factor: int, min: int, max: "int | None" = None) -> None:
    if work_factor < min or (max is not None and work_factor > max):
        upper = max if max is not None else "..."
        msg = f"work_factor must be between {min} - {upper}, got {work_factor}"
        raise ConfigurationError(msg)
