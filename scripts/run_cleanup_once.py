# scripts/run_cleanup_once.py
from portal.core.config import settings
from portal.core.logging import setup_logging
from portal.services.sessions import SessionManager


def main():
    setup_logging(settings.LOG_LEVEL)
    if not settings.CREDENTIALS_DIR:
        print({"removed": 0, "reason": "CREDENTIALS_DIR not set"})
        return
    # no live sessions in this process: every file older than the idle window goes
    removed = SessionManager(settings).purge_credential_files()
    print({"removed": removed})


if __name__ == "__main__":
    main()
