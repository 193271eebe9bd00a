"""Signed ledger transactions."""

from typing import Union

from marshmallow import EXCLUDE, fields

from ...messaging.models.base import BaseModel, BaseModelSchema

ETH_PROTOCOL = "eth"


class SignedTransaction(BaseModel):
    """Signature and raw transaction produced by the signing capability."""

    class Meta:
        """SignedTransaction metadata."""

        schema_class = "SignedTransactionSchema"

    def __init__(
        self,
        *,
        r: str,
        s: str,
        v: Union[int, str],
        signed_raw_transaction: str,
    ):
        """Initialize a SignedTransaction."""
        super().__init__()
        self.r = r
        self.s = s
        self.v = v
        self.signed_raw_transaction = signed_raw_transaction

    def to_envelope(self, unsigned_transaction: dict) -> dict:
        """Build the ``sendSignedTransaction`` parameters."""
        return {
            "protocol": ETH_PROTOCOL,
            "unsignedTransaction": unsigned_transaction,
            "r": self.r,
            "s": self.s,
            "v": str(self.v),
            "signedRawTransaction": self.signed_raw_transaction,
        }


class SignedTransactionSchema(BaseModelSchema):
    """SignedTransaction schema."""

    class Meta:
        """SignedTransactionSchema metadata."""

        model_class = SignedTransaction
        unknown = EXCLUDE

    r = fields.Str(required=True)
    s = fields.Str(required=True)
    v = fields.Raw(required=True)
    signed_raw_transaction = fields.Str(
        required=True, data_key="signedRawTransaction"
    )
