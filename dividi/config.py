# dividi/config.py
# Настройки процесса из окружения (.env подхватывается python-dotenv).
# Значения читаются один раз при импорте и дальше только читаются.

from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


# Город/имя по умолчанию для BR Code (поля 60/59), если вызывающий их не передал
DEFAULT_CITY = os.getenv("DIVIDI_DEFAULT_CITY", "BRASILIA")
DEFAULT_NAME = os.getenv("DIVIDI_DEFAULT_NAME", "DIVIDI USER")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = _split_csv(
    os.getenv(
        "DIVIDI_CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173",
    )
)
