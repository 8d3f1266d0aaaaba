from datetime import datetime


def fmt_datetime(iso):
    if not iso:
        return "-"
    try:
        return datetime.fromisoformat(str(iso).replace("Z", "+00:00")).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError):
        return "-"


def fmt_yes_no(flag):
    return "Yes" if flag else "No"


def fmt_text(value):
    return value if value else "-"
