# portal/core/navigation.py
"""Where the route guard sends people: login pages per portal section and
dashboards per role."""

ROLES = ("admin", "operator", "customer")

LOGIN_PATHS = {
    "admin": "/admin/login",
    "operator": "/operator/login",
    "customer": "/customer/login",
}

DASHBOARD_PATHS = {
    "admin": "/admin/dashboard",
    "operator": "/operator/dashboard",
    "customer": "/customer/dashboard",
}


def section_for(path: str) -> str:
    if path.startswith("/admin"):
        return "admin"
    if path.startswith("/operator"):
        return "operator"
    return "customer"


def login_path_for(path: str) -> str:
    return LOGIN_PATHS[section_for(path)]


def dashboard_path_for(role: str) -> str:
    # unknown roles land on the customer side, same as the login fallback
    return DASHBOARD_PATHS.get(role, DASHBOARD_PATHS["customer"])
