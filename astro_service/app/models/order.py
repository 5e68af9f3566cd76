from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from datetime import datetime, timezone
import enum
# Importar Base desde db.py
from app.db import Base

class OrderStatus(enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    COMPLETED = "completed"

class ServiceType(str, enum.Enum):
    DAILY_HOROSCOPE = "daily_horoscope"
    WEEKLY_HOROSCOPE = "weekly_horoscope"
    COMPATIBILITY = "compatibility"
    TAROT = "tarot"
    NATAL_CHART = "natal_chart"

# Precios fijos por servicio (daily_horoscope es gratuito y no se factura)
SERVICE_COSTS = {
    ServiceType.WEEKLY_HOROSCOPE.value: 333,
    ServiceType.COMPATIBILITY.value: 55,
    ServiceType.TAROT.value: 888,
    ServiceType.NATAL_CHART.value: 999,
}

def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(36), unique=True, index=True, nullable=False)
    user_id = Column(String(64), index=True, nullable=False)
    service_type = Column(String(32), nullable=False)
    service_data = Column(JSON, nullable=False, default=dict)
    amount = Column(Integer, nullable=False)
    status = Column(String(20), default=OrderStatus.PENDING.value, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    paid_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    service_content = Column(Text, nullable=True)
    content_source = Column(String(16), nullable=True)
