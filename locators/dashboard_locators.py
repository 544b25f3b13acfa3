class DashboardLocators:
    """Локаторы страницы tester-demo (SaaS-дашборд)"""

    # Заголовок и брендинг
    HEADING = "h1"
    HEADING_TEXT = "Dashboard Overview"
    BRAND_LABEL = "text=SaaSy Dashboard"

    # Карточки сетки: классы span-N собираются страницей динамически
    SPAN_CARDS = '[class*="span-"]'
    MIN_SPAN_CARDS = 6

    # Метрики
    TOTAL_REVENUE = "text=Total Revenue"
    ACTIVE_USERS = "text=Active Users"
    NEW_SIGNUPS = "text=New Signups"
    CHURN_RATE = "text=Churn Rate"
    METRIC_LABELS = [TOTAL_REVENUE, ACTIVE_USERS, NEW_SIGNUPS, CHURN_RATE]

    # Таблица активности
    ACTIVITY_TABLE = "#activity-table"
