from sqlalchemy.orm import sessionmaker
from app.models.order import Order, OrderStatus, ServiceType, SERVICE_COSTS, utcnow
from app.schemas.order import (
    DEFAULT_TAROT_SPREAD,
    MAX_BIRTH_DATE_LENGTH,
    MAX_BIRTH_PLACE_LENGTH,
    MAX_USER_ID_LENGTH,
    normalize_spread_type,
    normalize_zodiac_sign,
)
from app.core.exceptions import (
    InvalidParameterError,
    MissingParametersError,
    NotFoundError,
    PaymentRequiredError,
    UnknownServiceTypeError,
)
from typing import Any, Dict, List, Optional
import logging
import threading
import uuid

logger = logging.getLogger(__name__)


def normalize_service_data(service_type: str, service_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Validar y normalizar los parámetros que necesita cada tipo de servicio"""
    data = dict(service_data or {})

    try:
        if service_type in (ServiceType.DAILY_HOROSCOPE.value, ServiceType.WEEKLY_HOROSCOPE.value):
            if not data.get("zodiac_sign"):
                raise MissingParametersError("Zodiac sign not specified")
            data["zodiac_sign"] = normalize_zodiac_sign(data["zodiac_sign"])

        elif service_type == ServiceType.COMPATIBILITY.value:
            if not data.get("first_sign") or not data.get("second_sign"):
                raise MissingParametersError("Both signs required")
            data["first_sign"] = normalize_zodiac_sign(data["first_sign"])
            data["second_sign"] = normalize_zodiac_sign(data["second_sign"])

        elif service_type == ServiceType.TAROT.value:
            data["spread_type"] = normalize_spread_type(data.get("spread_type") or DEFAULT_TAROT_SPREAD)

        elif service_type == ServiceType.NATAL_CHART.value:
            # Se acepta birth_data anidado o los campos en el nivel superior
            birth_data = data.pop("birth_data", None)
            if birth_data is None:
                birth_data = {k: data.pop(k) for k in ("birth_date", "birth_place") if k in data}
            if not isinstance(birth_data, dict) or birth_data.get("birth_date") is None:
                raise MissingParametersError("Birth data required")

            birth_date = str(birth_data["birth_date"]).strip()
            if not birth_date:
                raise MissingParametersError("Birth data required")
            birth_place = birth_data.get("birth_place")
            if len(birth_date) > MAX_BIRTH_DATE_LENGTH:
                raise InvalidParameterError("Birth date is too long", field="birth_date")
            if birth_place is not None:
                birth_place = str(birth_place).strip()
                if len(birth_place) > MAX_BIRTH_PLACE_LENGTH:
                    raise InvalidParameterError("Birth place is too long", field="birth_place")

            data["birth_data"] = {"birth_date": birth_date, "birth_place": birth_place or None}

    except ValueError as e:
        raise InvalidParameterError(str(e))

    return data


class OrderService:
    """Almacén de pedidos: cada operación abre su propia sesión bajo un mutex"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self._lock = threading.Lock()

    def create_order(self, user_id, service_type: Optional[str],
                     service_data: Optional[Dict[str, Any]] = None) -> Order:
        """Crear nuevo pedido en estado pendiente"""
        if user_id is None or user_id == "" or not service_type:
            raise MissingParametersError()

        user_id = str(user_id).strip()
        if not user_id:
            raise MissingParametersError()
        if len(user_id) > MAX_USER_ID_LENGTH:
            raise InvalidParameterError("user_id is too long", field="user_id")

        amount = SERVICE_COSTS.get(service_type)
        if not amount:
            raise UnknownServiceTypeError(service_type)

        data = normalize_service_data(service_type, service_data)

        db_order = Order(
            order_id=str(uuid.uuid4()),
            user_id=user_id,
            service_type=service_type,
            service_data=data,
            amount=amount,
            status=OrderStatus.PENDING.value,
            created_at=utcnow(),
        )

        with self._lock, self.session_factory() as db:
            db.add(db_order)
            db.commit()
            db.refresh(db_order)

        logger.info("Created order %s (%s, %s) for user %s",
                    db_order.order_id, service_type, amount, user_id)
        return db_order

    def get_order(self, order_id: str) -> Order:
        """Obtener pedido por ID"""
        with self._lock, self.session_factory() as db:
            order = db.query(Order).filter(Order.order_id == order_id).first()

        if not order:
            raise NotFoundError("Order", order_id)
        return order

    def get_paid_order(self, order_id: str) -> Order:
        """Obtener pedido solo si ya fue pagado"""
        order = self.get_order(order_id)
        if order.status == OrderStatus.PENDING.value:
            raise PaymentRequiredError()
        return order

    def mark_paid(self, order_id: str) -> Optional[Order]:
        """Marcar como pagado; no hace nada si no existe o ya no está pendiente"""
        with self._lock, self.session_factory() as db:
            order = db.query(Order).filter(Order.order_id == order_id).first()

            if not order:
                logger.warning("Payment received for unknown order %s", order_id)
                return None
            if order.status != OrderStatus.PENDING.value:
                logger.info("Order %s already %s, ignoring payment", order_id, order.status)
                return None

            order.status = OrderStatus.PAID.value
            order.paid_at = utcnow()
            db.commit()
            db.refresh(order)

        logger.info("Order %s marked as paid", order_id)
        return order

    def get_orders_by_user(self, user_id: str) -> List[Order]:
        """Pedidos del usuario, los más recientes primero"""
        with self._lock, self.session_factory() as db:
            return (
                db.query(Order)
                .filter(Order.user_id == str(user_id))
                .order_by(Order.created_at.desc(), Order.id.desc())
                .all()
            )

    def attach_content(self, order_id: str, content: str, source: str) -> Order:
        """Guardar el contenido generado; el primero que se guarda se conserva"""
        with self._lock, self.session_factory() as db:
            order = db.query(Order).filter(Order.order_id == order_id).first()

            if not order:
                raise NotFoundError("Order", order_id)

            if order.service_content is None:
                order.service_content = content
                order.content_source = source
            else:
                logger.info("Order %s already has content, keeping stored version", order_id)

            if order.status == OrderStatus.PAID.value:
                order.status = OrderStatus.COMPLETED.value
                order.completed_at = utcnow()

            db.commit()
            db.refresh(order)

        return order
