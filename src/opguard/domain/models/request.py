"""Signing requests sent by connected dApps, and the operation content they carry."""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator

from opguard.domain.enums import OperationKind

RawOperation = dict[str, Any]


class AppMetadata(BaseModel):
    name: str = ""
    icon: str | None = None


class ConnectRequest(BaseModel):
    type: Literal["connect"] = "connect"
    origin: str = ""
    app_meta: AppMetadata | None = Field(default=None, validation_alias=AliasChoices("app_meta", "appMeta"))

    model_config = {"frozen": True}


class SignRequest(BaseModel):
    """Request to sign raw bytes. `preview` is the dApp-supplied decoding, if any."""

    type: Literal["sign"] = "sign"
    origin: str = ""
    payload: str  # hex-encoded bytes
    preview: list[RawOperation] | None = None

    model_config = {"frozen": True}

    @property
    def payload_bytes(self) -> bytes | None:
        """Decoded payload, or None if the hex is malformed."""
        try:
            return bytes.fromhex(self.payload.removeprefix("0x"))
        except ValueError:
            return None


class ConfirmOperationsRequest(BaseModel):
    type: Literal["confirm_operations"] = "confirm_operations"
    origin: str = ""
    operations: list[RawOperation] = Field(validation_alias=AliasChoices("operations", "opParams"))

    model_config = {"frozen": True}


SigningRequest = Annotated[
    Union[ConnectRequest, SignRequest, ConfirmOperationsRequest],
    Field(discriminator="type"),
]

_request_adapter = TypeAdapter(SigningRequest)


def parse_signing_request(data: Any) -> ConnectRequest | SignRequest | ConfirmOperationsRequest:
    return _request_adapter.validate_python(data)


class OperationContent(BaseModel):
    """One operation within a request. Parameters stay as untrusted raw JSON."""

    kind: OperationKind = OperationKind.TRANSACTION
    source: str | None = None
    destination: str | None = Field(default=None, validation_alias=AliasChoices("destination", "to"))
    amount: Decimal | None = None  # smallest unit (mutez)
    balance: Decimal | None = None  # origination only
    entrypoint: str | None = None
    parameters: Any = Field(default=None, validation_alias=AliasChoices("parameters", "parameter"))

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _unwrap_rpc_parameters(cls, data: Any) -> Any:
        """RPC form {parameters: {entrypoint, value}} -> entrypoint + parameters.

        The nested entrypoint is the one that gets forged and signed. A top-level
        entrypoint that disagrees with it makes the operation malformed.
        """
        if not isinstance(data, dict):
            return data
        for field in ("parameters", "parameter"):
            params = data.get(field)
            if isinstance(params, dict) and set(params) == {"entrypoint", "value"}:
                declared = data.get("entrypoint")
                if declared is not None and declared != params["entrypoint"]:
                    raise ValueError(
                        f"entrypoint {declared!r} conflicts with parameter entrypoint {params['entrypoint']!r}"
                    )
                data = {k: v for k, v in data.items() if k != field}
                data["entrypoint"] = params["entrypoint"]
                data["parameters"] = params["value"]
                break
        return data

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in {k.value for k in OperationKind}:
            return OperationKind.OTHER
        return value

    @field_validator("amount", "balance", mode="before")
    @classmethod
    def _parse_units(cls, value: Any) -> Decimal | None:
        if value is None:
            return None
        if isinstance(value, bool) or isinstance(value, float):
            raise ValueError("amount must be an integer or a decimal string")
        try:
            qty = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"invalid amount: {value!r}") from e
        if not qty.is_finite() or qty != qty.to_integral_value() or qty < 0:
            raise ValueError(f"amount must be a non-negative integer: {value!r}")
        return qty

    @property
    def has_parameters(self) -> bool:
        return self.parameters is not None

    @classmethod
    def from_raw(cls, raw: Any) -> "OperationContent | None":
        """Validate raw operation content. Returns None if it is malformed."""
        if isinstance(raw, OperationContent):
            return raw
        try:
            return cls.model_validate(raw)
        except ValidationError:
            return None
