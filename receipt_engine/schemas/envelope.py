"""
Input schemas: the transaction envelope and its category-specific detail payload.

The envelope is whatever the history screen serialized for us, so every
model here is lenient: unknown keys are kept as extras (they are resolution
sources), numbers are accepted where display strings are expected, and
nothing is required beyond being a JSON object.
"""

from decimal import Decimal
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Scalar = Union[int, float, Decimal, str]

_LENIENT = ConfigDict(
    frozen=True,
    extra="allow",
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
)


class Envelope(BaseModel):
    """The primary transaction record passed to a receipt screen."""
    model_config = _LENIENT

    id: Optional[str] = None
    type: str = ""
    status: str = ""
    amount: str = ""                        # display string, e.g. "-₦10,000"
    date: str = ""                          # display string
    created_at: Optional[str] = None
    details: Optional[dict[str, Any]] = None

    @field_validator("type", "status", "amount", "date", mode="before")
    @classmethod
    def _null_as_blank(cls, v: Any) -> Any:
        return "" if v is None else v

    def as_source(self) -> dict[str, Any]:
        """Top-level fields by their wire names, extras included."""
        return self.model_dump(by_alias=True, exclude={"details"})

    def detail_source(self) -> dict[str, Any]:
        return dict(self.details or {})


class SwapDetails(BaseModel):
    """Structured swap legs, when the backend supplies them."""
    model_config = _LENIENT

    from_amount: Optional[Scalar] = None
    from_currency: Optional[str] = None
    to_amount: Optional[Scalar] = None
    to_currency: Optional[str] = None
    rate: Optional[Scalar] = None
    exchange_rate: Optional[Scalar] = None


class _DetailBase(BaseModel):
    model_config = _LENIENT

    category: Optional[str] = None
    created_at: Optional[str] = None
    swap_details: Optional[SwapDetails] = None


class TokenDetail(_DetailBase):
    kind: Literal["token"] = "token"

    transaction_id: Optional[str] = None
    currency: Optional[str] = None
    network: Optional[str] = None
    address: Optional[str] = None
    hash: Optional[str] = None
    fee: Optional[Scalar] = None
    narration: Optional[str] = None


class UtilityDetail(_DetailBase):
    kind: Literal["utility"] = "utility"

    order_id: Optional[str] = None
    request_id: Optional[str] = None
    product_name: Optional[str] = None
    quantity: Optional[Scalar] = None
    network: Optional[str] = None
    customer_info: Optional[str] = None
    bill_type: Optional[str] = None
    payment_currency: Optional[str] = None


class WithdrawalDetail(_DetailBase):
    kind: Literal["withdrawal"] = "withdrawal"

    is_ngnz_withdrawal: Optional[bool] = Field(default=None, alias="isNGNZWithdrawal")
    currency: Optional[str] = None
    withdrawal_reference: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    amount_sent_to_bank: Optional[Scalar] = None
    withdrawal_fee: Optional[Scalar] = None


DetailPayload = Annotated[
    Union[TokenDetail, UtilityDetail, WithdrawalDetail],
    Field(discriminator="kind"),
]
