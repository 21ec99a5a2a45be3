from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from dataclasses import dataclass
import math

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from email_validator import EmailNotValidError, validate_email

from estatehub.core.exceptions import ValidationError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PAGE = 1_000_000
MAX_LIMIT = 100


class CamelModel(BaseModel):
    """Base for API contracts: snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RawInput(CamelModel):
    """Client payload checked field by field in a service; JSON numbers arrive as text"""
    model_config = ConfigDict(coerce_numbers_to_str=True)


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    data: List[T]


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: List[T]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None


@dataclass(frozen=True)
class Pagination:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pages_for(self, total: int) -> int:
        return math.ceil(total / self.limit)


def _positive_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def parse_pagination(page: Any = None, limit: Any = None) -> Pagination:
    """
    Lenient page/limit parsing: anything unusable falls back to 1/10.

    Pages past MAX_PAGE are unusable; limits above MAX_LIMIT are clamped.
    """
    parsed_page = _positive_int(page, DEFAULT_PAGE)
    if parsed_page > MAX_PAGE:
        parsed_page = DEFAULT_PAGE
    return Pagination(
        page=parsed_page,
        limit=min(_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT),
    )


def is_blank(value: Any) -> bool:
    """True for values a form would send when a field was left empty"""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def validate_input(model: Type[M], data: Dict[str, Any]) -> M:
    """Validate ``data`` against ``model``, raising our ValidationError on failure"""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        raise ValidationError(f"Invalid {field}: {message}" if field else message)


def normalize_email(value: str) -> str:
    """Trim, lower-case and syntax-check an email address (no DNS lookups)"""
    email = str(value).strip().lower()
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please provide a valid email")
    return email


def paginated(model: Type[BaseModel], items: List[Any], total: int,
              pagination: Pagination) -> PaginatedResponse:
    return PaginatedResponse[model](
        count=len(items),
        total=total,
        page=pagination.page,
        pages=pagination.pages_for(total),
        data=items,
    )
