from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool
from app.core.config import settings
from app.core.exceptions import AstroError, MissingParametersError
from app.services.order_service import OrderService
from app.services.content_service import ContentGenerator
from app.schemas.order import (
    CompatibilityRequest,
    ContentResponse,
    HoroscopeRequest,
    InvoiceCreate,
    InvoiceResponse,
    NatalChartRequest,
    OrderEnvelope,
    OrderResponse,
    ServiceResultResponse,
    TarotRequest,
    UserOrdersResponse,
)
from app.models.order import ServiceType
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service

def get_content_generator(request: Request) -> ContentGenerator:
    return request.app.state.content_generator


async def _generate(generator: ContentGenerator, service_type: ServiceType, params: dict,
                    error_message: str) -> ContentResponse:
    try:
        result = await generator.generate(service_type.value, params)
        return ContentResponse(content=result.text, source=result.source.value)
    except Exception as e:
        logger.exception("Error generating %s: %s", service_type.value, e)
        raise HTTPException(status_code=500, detail=error_message)


@router.post("/create-invoice", response_model=InvoiceResponse)
def create_invoice(invoice_data: InvoiceCreate,
                   service: OrderService = Depends(get_order_service)):
    """Crear pedido pendiente y devolver el enlace de pago"""
    logger.info("Creating invoice for user=%s service=%s",
                invoice_data.user_id, invoice_data.service_type)
    try:
        order = service.create_order(
            invoice_data.user_id,
            invoice_data.service_type,
            invoice_data.service_data,
        )
    except AstroError:
        raise
    except Exception as e:
        logger.exception("Error creating invoice: %s", e)
        raise HTTPException(status_code=500, detail="Invoice creation failed")

    # El enlace es sintético: no hay integración real con el proveedor de pagos
    return InvoiceResponse(
        order_id=order.order_id,
        invoice_link=f"https://t.me/{settings.bot_username}?start={order.order_id}",
        amount=order.amount,
    )


@router.post("/daily-horoscope", response_model=ContentResponse)
async def daily_horoscope(body: HoroscopeRequest,
                          generator: ContentGenerator = Depends(get_content_generator)):
    if not body.zodiac_sign:
        raise MissingParametersError("Zodiac sign not specified")
    logger.info("Generating daily horoscope for %s", body.zodiac_sign)
    return await _generate(generator, ServiceType.DAILY_HOROSCOPE,
                           {"zodiac_sign": body.zodiac_sign}, "Horoscope generation failed")


@router.post("/weekly-horoscope", response_model=ContentResponse)
async def weekly_horoscope(body: HoroscopeRequest,
                           generator: ContentGenerator = Depends(get_content_generator)):
    if not body.zodiac_sign:
        raise MissingParametersError("Zodiac sign not specified")
    return await _generate(generator, ServiceType.WEEKLY_HOROSCOPE,
                           {"zodiac_sign": body.zodiac_sign}, "Weekly horoscope generation failed")


@router.post("/compatibility", response_model=ContentResponse)
async def compatibility(body: CompatibilityRequest,
                        generator: ContentGenerator = Depends(get_content_generator)):
    if not body.first_sign or not body.second_sign:
        raise MissingParametersError("Both signs required")
    params = {"first_sign": body.first_sign, "second_sign": body.second_sign}
    return await _generate(generator, ServiceType.COMPATIBILITY, params, "Compatibility analysis failed")


@router.post("/tarot-reading", response_model=ContentResponse)
async def tarot_reading(body: TarotRequest,
                        generator: ContentGenerator = Depends(get_content_generator)):
    if not body.spread_type:
        raise MissingParametersError("Spread type required")
    return await _generate(generator, ServiceType.TAROT,
                           {"spread_type": body.spread_type}, "Tarot reading failed")


@router.post("/natal-chart", response_model=ContentResponse)
async def natal_chart(body: NatalChartRequest,
                      generator: ContentGenerator = Depends(get_content_generator)):
    if not body.birth_data or not body.birth_data.birth_date:
        raise MissingParametersError("Birth data required")
    params = {"birth_data": body.birth_data.model_dump()}
    return await _generate(generator, ServiceType.NATAL_CHART, params, "Natal chart generation failed")


@router.get("/service-result/{order_id}", response_model=ServiceResultResponse)
async def service_result(order_id: str,
                         service: OrderService = Depends(get_order_service),
                         generator: ContentGenerator = Depends(get_content_generator)):
    """Obtener (y generar la primera vez) el contenido de un pedido pagado"""
    try:
        order = await run_in_threadpool(service.get_paid_order, order_id)
        if order.service_content is None:
            result = await generator.generate(order.service_type, order.service_data)
            order = await run_in_threadpool(
                service.attach_content, order.order_id, result.text, result.source.value
            )
            logger.info("Order %s completed with %s content", order.order_id, order.content_source)
    except AstroError:
        raise
    except Exception as e:
        logger.exception("Error getting service result for %s: %s", order_id, e)
        raise HTTPException(status_code=500, detail="Service result retrieval failed")

    return ServiceResultResponse(
        service_type=order.service_type,
        service_data=order.service_data,
        content=order.service_content,
        source=order.content_source,
        paid_at=order.paid_at,
        completed_at=order.completed_at,
    )


@router.post("/webhook/payment")
async def payment_webhook(request: Request, service: OrderService = Depends(get_order_service)):
    """Marcar pedido como pagado; siempre responde éxito"""
    try:
        event_data = await request.json()
    except ValueError:
        event_data = {}

    if not isinstance(event_data, dict):
        event_data = {}
    data = event_data.get("data", event_data)
    order_id = data.get("order_id") if isinstance(data, dict) else None

    logger.info("Received payment webhook for order %s", order_id)
    if order_id:
        try:
            await run_in_threadpool(service.mark_paid, str(order_id))
        except Exception as e:
            logger.exception("Error marking order %s as paid: %s", order_id, e)

    return {"success": True}


@router.get("/order/{order_id}", response_model=OrderEnvelope)
def get_order(order_id: str, service: OrderService = Depends(get_order_service)):
    """Obtener pedido por ID"""
    order = service.get_order(order_id)
    return OrderEnvelope(order=OrderResponse.model_validate(order))


@router.get("/user-orders/{user_id}", response_model=UserOrdersResponse)
def get_user_orders(user_id: str, service: OrderService = Depends(get_order_service)):
    """Historial de pedidos del usuario"""
    orders = service.get_orders_by_user(user_id)
    return UserOrdersResponse(orders=[OrderResponse.model_validate(o) for o in orders])
