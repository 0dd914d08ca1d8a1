# core/utils.py


def parse_year_param(request, param='year'):
    """
    Read a year from the query string.

    Returns None when the parameter is absent; raises ValueError when it is
    not a positive integer.
    """
    raw = request.query_params.get(param)
    if raw in (None, ''):
        return None
    year = int(raw)
    if year < 1:
        raise ValueError(f"Invalid year: {raw}")
    return year
