from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from typing import Annotated, Any, Dict, List, Optional, Union
from datetime import datetime, timezone

ZODIAC_SIGNS = [
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces",
]

TAROT_SPREADS = ["one_card", "three_card", "celtic_cross", "love", "career", "yes_no"]
DEFAULT_TAROT_SPREAD = "three_card"

MAX_USER_ID_LENGTH = 64
MAX_BIRTH_DATE_LENGTH = 32
MAX_BIRTH_PLACE_LENGTH = 128

# Nombres en ruso que envía el bot
ZODIAC_SIGN_ALIASES = {
    "овен": "Aries", "телец": "Taurus", "близнецы": "Gemini", "рак": "Cancer",
    "лев": "Leo", "дева": "Virgo", "весы": "Libra", "скорпион": "Scorpio",
    "стрелец": "Sagittarius", "козерог": "Capricorn", "водолей": "Aquarius", "рыбы": "Pisces",
}

_SIGNS_BY_KEY = {sign.lower(): sign for sign in ZODIAC_SIGNS}
_SIGNS_BY_KEY.update(ZODIAC_SIGN_ALIASES)


def _iso_utc(value: datetime) -> str:
    """ISO 8601 en UTC con sufijo Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


UtcDatetime = Annotated[datetime, PlainSerializer(_iso_utc, return_type=str)]


def normalize_zodiac_sign(value: str) -> str:
    """Devuelve el nombre canónico del signo o lanza ValueError"""
    sign = _SIGNS_BY_KEY.get(str(value).strip().lower())
    if sign is None:
        raise ValueError(f"Unknown zodiac sign: {value}")
    return sign


def normalize_spread_type(value: str) -> str:
    spread = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    if spread not in TAROT_SPREADS:
        raise ValueError(f"Unknown spread type: {value}")
    return spread


class InvoiceCreate(BaseModel):
    user_id: Optional[Union[int, str]] = None
    service_type: Optional[str] = None
    service_data: Optional[Dict[str, Any]] = None


class InvoiceResponse(BaseModel):
    success: bool = True
    order_id: str
    invoice_link: str
    amount: int


class HoroscopeRequest(BaseModel):
    user_id: Optional[Union[int, str]] = None
    zodiac_sign: Optional[str] = None

    @field_validator("zodiac_sign")
    @classmethod
    def check_sign(cls, v):
        return None if v is None else normalize_zodiac_sign(v)


class CompatibilityRequest(BaseModel):
    user_id: Optional[Union[int, str]] = None
    first_sign: Optional[str] = None
    second_sign: Optional[str] = None

    @field_validator("first_sign", "second_sign")
    @classmethod
    def check_signs(cls, v):
        return None if v is None else normalize_zodiac_sign(v)


class TarotRequest(BaseModel):
    user_id: Optional[Union[int, str]] = None
    spread_type: Optional[str] = None

    @field_validator("spread_type")
    @classmethod
    def check_spread(cls, v):
        return None if v is None else normalize_spread_type(v)


class BirthData(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    birth_date: Optional[str] = Field(None, max_length=MAX_BIRTH_DATE_LENGTH)
    birth_place: Optional[str] = Field(None, max_length=MAX_BIRTH_PLACE_LENGTH)


class NatalChartRequest(BaseModel):
    user_id: Optional[Union[int, str]] = None
    birth_data: Optional[BirthData] = None


class ContentResponse(BaseModel):
    success: bool = True
    content: str
    source: str


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    service_type: str
    service_data: Dict[str, Any]
    amount: int
    status: str
    created_at: UtcDatetime
    paid_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None
    service_content: Optional[str] = None
    content_source: Optional[str] = None

    class Config:
        from_attributes = True


class OrderEnvelope(BaseModel):
    success: bool = True
    order: OrderResponse


class UserOrdersResponse(BaseModel):
    success: bool = True
    orders: List[OrderResponse]


class ServiceResultResponse(BaseModel):
    success: bool = True
    service_type: str
    service_data: Dict[str, Any]
    content: str
    source: Optional[str] = None
    paid_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None
