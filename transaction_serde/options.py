"""Helpers for merging per-call options over module defaults."""


def merge_options(defaults, *overrides):
    """
    Merge option dictionaries over a set of defaults.

    Args:
        defaults (dict): Default option values
        *overrides (dict or None): Partial options, later ones take precedence.
            None overrides and None values are ignored.

    Returns:
        dict: A new dictionary; the inputs are not modified

    Examples:
        >>> merge_options({'locale': 'en-US', 'header': '!Type:Bank'}, {'locale': 'en-GB'})
        {'locale': 'en-GB', 'header': '!Type:Bank'}
    """
    merged = dict(defaults)
    for override in overrides:
        if not override:
            continue
        merged.update({key: value for key, value in override.items() if value is not None})
    return merged
