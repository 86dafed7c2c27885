import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent  # <project>
INSTANCE_DIR = BASE_DIR / "instance"

def _default_sqlite_uri():
    return f"sqlite:///{(INSTANCE_DIR / 'salon.db').as_posix()}"

def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or _default_sqlite_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # удалённый расчёт зарплаты; пусто — только локальный расчёт
    PAYSLIP_API_URL = os.getenv("PAYSLIP_API_URL", "").rstrip("/")
    PAYSLIP_API_TIMEOUT = _float_env("PAYSLIP_API_TIMEOUT", 5.0)

    # начало рабочего дня, для вычисления опоздания по времени прихода
    WORK_START_TIME = os.getenv("WORK_START_TIME", "09:00")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

def ensure_instance(app):
    # Flask instance path
    os.makedirs(app.instance_path, exist_ok=True)
    INSTANCE_DIR.mkdir(parents=True, exist_ok=True)
