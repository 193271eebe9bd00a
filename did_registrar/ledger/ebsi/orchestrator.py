"""Build, sign and submit sequences of registry transactions."""

import logging
from enum import Enum
from typing import List, Mapping, Optional, Sequence

from ...utils.randomness import RandomSource
from ...wallet.base import BaseTransactionSigner
from ...wallet.error import SigningError
from ..error import RpcFaultError
from .constants import EbsiRpcMethod
from .rpc import EbsiRpcClient, RpcFault
from .steps import LedgerWriteStep

LOGGER = logging.getLogger(__name__)


class TransactionState(Enum):
    """States of a ledger write session."""

    IDLE = "idle"
    BUILDING = "building"
    SIGNING = "signing"
    SUBMITTING = "submitting"
    STEP_COMPLETE = "step-complete"
    DONE = "done"
    ABORTED = "aborted"


class LedgerTransactionOrchestrator:
    """Run registry write steps one after another.

    Each step is built by the registry, signed with the controller key and
    submitted. The first fault aborts the session; steps that were already
    submitted stay on the ledger.
    """

    def __init__(
        self,
        transport: EbsiRpcClient,
        signer: BaseTransactionSigner,
        random: RandomSource = None,
    ):
        """Initialize the orchestrator with its collaborators."""
        self.transport = transport
        self.signer = signer
        self.random = random or RandomSource()

    async def execute(
        self,
        steps: Sequence[LedgerWriteStep],
        *,
        kid: str,
        bearer_token: str,
        rpc_id: Optional[int] = None,
        api_opts: Optional[Mapping] = None,
    ) -> List:
        """Execute the steps in order.

        Args:
            steps: the registry operations to perform
            kid: handle of the controller key signing every transaction
            bearer_token: access token for the registry
            rpc_id: request id shared by all calls of the session
            api_opts: endpoint overrides passed to the transport

        Returns:
            The submission results, one per step

        Raises:
            RpcFaultError: when a build or submit call returns a fault
            SigningError: when the signer fails

        """
        rpc_id = self.random.rpc_id() if rpc_id is None else rpc_id
        state = TransactionState.IDLE
        receipts = []
        for index, step in enumerate(steps):
            try:
                state = self._transition(state, TransactionState.BUILDING, step)
                unsigned = await self._call(
                    step.method, step.params, rpc_id, bearer_token, api_opts
                )

                state = self._transition(state, TransactionState.SIGNING, step)
                signed = await self._sign(kid, unsigned)

                state = self._transition(state, TransactionState.SUBMITTING, step)
                receipts.append(
                    await self._call(
                        EbsiRpcMethod.SEND_SIGNED_TRANSACTION,
                        signed.to_envelope(unsigned),
                        rpc_id,
                        bearer_token,
                        api_opts,
                    )
                )
                state = self._transition(state, TransactionState.STEP_COMPLETE, step)
            except (RpcFaultError, SigningError):
                self._transition(state, TransactionState.ABORTED, step)
                LOGGER.warning(
                    "Ledger write aborted at step %d of %d (%s); "
                    "%d completed step(s) are not rolled back",
                    index + 1,
                    len(steps),
                    step.method.value,
                    index,
                )
                raise
        self._transition(state, TransactionState.DONE)
        return receipts

    async def _call(self, method, params: dict, rpc_id, bearer_token, api_opts):
        outcome = await self.transport.call(
            method, [params], rpc_id, bearer_token, api_opts
        )
        if isinstance(outcome, RpcFault):
            raise RpcFaultError(
                outcome.payload, method=EbsiRpcMethod(method).value, rpc_id=rpc_id
            )
        return outcome.value

    async def _sign(self, kid: str, unsigned: dict):
        try:
            return await self.signer.sign_eth_transaction(kid, unsigned)
        except SigningError:
            raise
        except Exception as err:
            raise SigningError(f"Signing with key {kid} failed") from err

    @staticmethod
    def _transition(
        current: TransactionState,
        new: TransactionState,
        step: LedgerWriteStep = None,
    ) -> TransactionState:
        LOGGER.debug(
            "%s -> %s%s",
            current.value,
            new.value,
            f" ({step.method.value})" if step else "",
        )
        return new
