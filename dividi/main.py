# dividi/main.py
# Главная точка входа FastAPI для Dividi.
# Что здесь:
#  • Роутеры расчётного ядра: балансы/settle-up, сплиты, каталог рельсов, платёжные строки, валюты.
#  • Сервис без состояния: никакой БД, всё нужное приходит в теле запроса.
#  • Уровень логирования - из LOG_LEVEL (.env).

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dividi import config

from dividi.routers.groups import router as groups_router
from dividi.routers.splits import router as splits_router
from dividi.routers.payment_rails import router as payment_rails_router
from dividi.routers.payments import router as payments_router
from dividi.routers.currencies import router as currencies_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Dividi Backend",
    description="Расчётное ядро Dividi: балансы группы, разбивка сумм, выбор платёжного рельса и платёжные строки.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Подключение роутеров ---
app.include_router(groups_router,        prefix="/api", tags=["Балансы"])
app.include_router(splits_router,        prefix="/api", tags=["Сплиты"])
app.include_router(payment_rails_router, prefix="/api", tags=["Платёжные рельсы"])
app.include_router(payments_router,      prefix="/api", tags=["Платежи"])
app.include_router(currencies_router,    prefix="/api", tags=["Валюты"])


@app.get("/")
def root():
    """Простой healthcheck."""
    return {"message": "Dividi backend работает!", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dividi.main:app", host="0.0.0.0", port=8000, reload=False)
