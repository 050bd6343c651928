from datetime import date
from zoneinfo import ZoneInfo

BKK_TZ = ZoneInfo("Asia/Bangkok")

MONTHS_EN = {
    "01": "January",
    "02": "February",
    "03": "March",
    "04": "April",
    "05": "May",
    "06": "June",
    "07": "July",
    "08": "August",
    "09": "September",
    "10": "October",
    "11": "November",
    "12": "December",
}


def format_month(ref: str | date | None) -> str:
    if isinstance(ref, date):
        ref = ref.strftime("%Y-%m")
    if not ref or "-" not in ref:
        return ref or ""
    year, month = ref.split("-")[:2]
    return f"{MONTHS_EN.get(month, month)} {year}"
