"""Static Hebrew labels and message templates."""

from __future__ import annotations

MONTHS_HEBREW = (
    "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
    "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
)

# Indexed by date.weekday(), Monday first.
WEEKDAYS_HEBREW = (
    "יום שני", "יום שלישי", "יום רביעי", "יום חמישי", "יום שישי", "יום שבת", "יום ראשון",
)

DEFAULT_CATEGORY = "אחר"

# rule id -> (icon, title, description template)
MONTHLY_INSIGHTS = {
    "completion_high": ("🎯", "השלמת משימות מצוינת", "השלמת {rate}% מהמשימות החודש - עבודה מעולה!"),
    "completion_mid": ("📊", "התקדמות סבירה במשימות", "השלמת {rate}% מהמשימות. יש מקום לשיפור."),
    "completion_low": ("⚠️", "שיעור השלמה נמוך", "רק {rate}% מהמשימות הושלמו. שקול לפרק משימות גדולות."),
    "goals_high": ("🏆", "יעדים הושגו!", "הגעת ל-{achieved} מתוך {total} יעדים - מרשים!"),
    "goals_mid": ("🎯", "התקדמות ביעדים", "הגעת ל-{achieved} מתוך {total} יעדים."),
    "busiest_day": ("🔥", "יום העמוס ביותר", "{day} ({weekday}) היה היום העמוס עם {load} פריטים."),
    "event_hours": ("⏰", "שעות אירועים", "בילית {hours} שעות באירועים החודש."),
    "load_high": ("😓", "עומס יומי גבוה", "ממוצע של {load} פריטים ביום. שקול להאציל או לדחות."),
    "load_balanced": ("😌", "עומס מאוזן", "ממוצע של {load} פריטים ביום - קצב בריא!"),
    "high_priority": ("🚨", "יותר מדי משימות דחופות", "{percent}% מהמשימות בעדיפות גבוהה. עדכן סדרי עדיפויות."),
    "momentum_up": ("📈", "מגמת שיפור", "השלמת יותר משימות במחצית השנייה של החודש."),
    "momentum_down": ("📉", "ירידה בקצב", "השלמת פחות משימות במחצית השנייה. נסה לשמור על מומנטום."),
}

COMPARISON_LABELS = {
    "tasks_completed": "משימות שהושלמו",
    "events": "אירועים",
    "completion_rate": "שיעור השלמה",
}

HEALTH_STATUS_LABELS = {
    "calm": "רגוע",
    "busy": "עמוס",
    "overloaded": "עומס יתר",
}

HEALTH_INSIGHTS = {
    "overdue": "{count} משימות באיחור",
    "backlog": "{count} משימות ב-3 ימים הקרובים",
    "events_today": "יום עמוס: {count} אירועים היום",
    "streak": "{count} ימים עמוסים ברצף",
    "open_tasks": "{count} משימות פתוחות",
    "all_clear": "הכל תחת שליטה!",
    "deep_work": "יום פתוח לעבודה עמוקה",
}

# insight key -> (icon, title, message template)
DAILY_INSIGHTS = {
    "overdue_tasks_long": ("⏰", "משימות באיחור", "{count} משימות באיחור של 3+ ימים."),
    "overdue_tasks": ("⏰", "משימות באיחור", "{count} משימות באיחור."),
    "heavy_days_streak": ("🔥", "שבוע עמוס לפניך", "{count} ימים עמוסים ברצף בשבוע הקרוב."),
    "company_concentration": ("📊", "ריכוז לקוחות", "{name} תופסת {percent}% מהזמן שלך החודש."),
    "completion_rate_low": ("📉", "שיעור השלמה נמוך", "רק {rate}% מהמשימות הושלמו החודש."),
    "no_events_week": ("📅", "שבוע פנוי", "אין אירועים מתוכננים לשבוע הקרוב."),
    "creator_at_risk": ("🚨", "יוצרים בעומס יתר", "{names}{more} במצב עומס יתר."),
    "agency_performance_up": ("⭐", "ביצועים מצוינים", "שיעור השלמה של {rate}% בסוכנות."),
    "agency_completion_low": ("📉", "שיעור השלמה נמוך", "רק {rate}% מהמשימות הושלמו בסוכנות."),
}

AND_MORE = " ועוד {count}"

EXPORT_TITLE = "סיכום חודשי - {month} {year}"
DEFAULT_OWNER = "יוצר"
