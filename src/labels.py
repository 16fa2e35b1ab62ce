"""Text helpers for node labels."""


def get_initials(name: str) -> str:
    """'Ivan Petrov' -> 'IP', 'Maria' -> 'M', '' -> '?'."""
    parts = name.split()
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def format_date_label(birth_year: int | None = None, death_year: int | None = None) -> str:
    if birth_year is not None and death_year is not None:
        return f"{birth_year} — {death_year}"
    if birth_year is not None:
        return f"{birth_year}"
    if death_year is not None:
        return f"† {death_year}"
    return ""
