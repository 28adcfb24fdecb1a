from dataclasses import dataclass, field
from typing import Optional, Tuple


def json_field(key: Optional[str] = None, coerce: Optional[str] = None):
    """
    Поле сущности с метаданными для декодера:
      key    — имя ключа в JSON (если отличается от имени поля)
      coerce — имя правила приведения string|number (см. coerce.RULES)
    """
    metadata = {}
    if key is not None:
        metadata["key"] = key
    if coerce is not None:
        metadata["coerce"] = coerce
    return field(metadata=metadata)


@dataclass(frozen=True)
class CostAmount:
    amount: float = json_field(coerce="amount")  # binary32


@dataclass(frozen=True)
class Cost:
    total_amount: CostAmount = json_field("totalAmount")


@dataclass(frozen=True)
class DeliveryAddress:
    city: str
    country_code: str = json_field("countryCode")
    province_code: str = json_field("provinceCode")
    zip: int = json_field(coerce="zip")  # u32


@dataclass(frozen=True)
class DeliveryGroup:
    delivery_address: DeliveryAddress = json_field("deliveryAddress")


@dataclass(frozen=True)
class Customer:
    email: str


@dataclass(frozen=True)
class Identity:
    customer: Customer


@dataclass(frozen=True)
class Cart:
    cost: Cost
    delivery_groups: Tuple[DeliveryGroup, ...] = json_field("deliveryGroups")
    buyer_identity: Identity = json_field("buyerIdentity")


@dataclass(frozen=True)
class Shop:
    cart: Cart
