"""Interfaces and base classes for DID Registrar."""

import logging

from ..config.injection_context import InjectionContext
from .did_registrars import DIDRegistrars

LOGGER = logging.getLogger(__name__)


async def setup(context: InjectionContext):
    """Set up default registrars."""
    registry = context.inject_or(DIDRegistrars)
    if not registry:
        LOGGER.warning("No DID registrar Registry instance found in context")
        return

    if context.settings.get_bool("ledger.disabled"):
        LOGGER.warning("Ledger is not configured, not loading EbsiDIDRegistrar")
        return

    from ..ledger.ebsi.rpc import EbsiRpcClient
    from ..wallet.base import BaseKeyManager, BaseTransactionSigner
    from .default.ebsi import EbsiDIDRegistrar

    transport = context.inject_or(EbsiRpcClient)
    if not transport:
        transport = EbsiRpcClient(context.settings)
        context.bind_instance(EbsiRpcClient, transport)

    registrar = EbsiDIDRegistrar(
        transport,
        context.inject(BaseTransactionSigner),
        context.inject(BaseKeyManager),
        default_kms=context.settings.get_str("ebsi.default_kms"),
    )
    await registrar.setup(context)
    registry.register_registrar(registrar)
