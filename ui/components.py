import re


def pretty_label(label: str) -> str:
    """Convert field keys to more readable labels."""

    label = re.sub(r"(_|-)+", " ", label)
    return re.sub(r"(?<!^)(?=[A-Z])", " ", label).strip().title()


def money(x) -> str:
    return f"${x:,.2f}"
