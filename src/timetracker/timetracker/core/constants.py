"""Domain defaults: local offset, break cap and working hours."""

LOCAL_UTC_OFFSET_HOURS = 5  # Asia/Tashkent, no DST
DEFAULT_BREAK_CAP_SECONDS = 3600
WORK_START_HOUR = 9
WORK_END_HOUR = 18
