"""EBSI DID Registrar.

Ledger writes go through the EBSI DID registry JSON-RPC API using the
LedgerTransactionOrchestrator.
"""

import logging
import time
from typing import List, Mapping, Optional, Sequence

from ...ledger.ebsi.constants import MAX_NOT_AFTER, EbsiDidSpecInfos, merge_api_opts
from ...ledger.ebsi.ids import generate_ebsi_method_specific_id, generate_private_key_hex
from ...ledger.ebsi.orchestrator import LedgerTransactionOrchestrator
from ...ledger.ebsi.rpc import EbsiRpcClient
from ...ledger.ebsi.steps import (
    add_service_step,
    add_verification_method_relationship_step,
    add_verification_method_step,
    insert_did_document_step,
)
from ...utils.randomness import RandomSource
from ...wallet.base import BaseKeyManager, BaseTransactionSigner
from ...wallet.key_type import KeyType
from ...wallet.purposes import KeyPurpose, assign_purposes, to_purposes
from ...wallet.util import strip_hex_prefix
from ..base import (
    BaseDidRegistrar,
    InvalidInput,
    UnsupportedOperationError,
)
from ..models.identifier import Identifier
from ..models.key import ImportableKey, KeyDescriptor
from ..models.service import Service

LOGGER = logging.getLogger(__name__)


class EbsiDIDRegistrar(BaseDidRegistrar):
    """did:ebsi registrar for legal entity DIDs."""

    PROVIDER = "did:ebsi"

    def __init__(
        self,
        transport: EbsiRpcClient,
        signer: BaseTransactionSigner,
        key_manager: BaseKeyManager,
        *,
        default_kms: str = None,
        api_opts: Mapping = None,
        random: RandomSource = None,
    ):
        """Initialize EBSI Registrar.

        Args:
            transport: JSON-RPC client of the DID registry
            signer: signing capability for controller keys
            key_manager: key storage capability used when creating DIDs
            default_kms: KMS used when create_identifier is not given one
            api_opts: default registry endpoint options
            random: source of ids, rpc ids and key material

        """
        super().__init__()
        self.key_manager = key_manager
        self.default_kms = default_kms
        self.api_opts = dict(api_opts or {})
        self.random = random or RandomSource()
        self.orchestrator = LedgerTransactionOrchestrator(
            transport, signer, random=self.random
        )

    @property
    def method(self) -> str:
        """Return method handled by this registrar."""
        return "ebsi"

    async def create_identifier(
        self,
        kms: Optional[str] = None,
        alias: Optional[str] = None,
        options: Optional[dict] = None,
    ) -> Identifier:
        """Create a did:ebsi identifier, optionally registering it on the ledger.

        Options:
            type: EbsiDidSpecInfo, V1 (legal entity) by default
            method_specific_id: use this id instead of a random one
            secp256k1_key / secp256r1_key: key options with ``private_key_hex``,
                ``kid``, ``purposes`` and ``type``
            execute_ledger_operation: write the DID document to the registry
            bearer_token: access token, required for ledger operations
            rpc_id, not_before, not_after, base_document, api_opts
        """
        options = dict(options or {})
        kms = kms or self.default_kms
        spec_info = options.get("type") or EbsiDidSpecInfos.V1
        execute_ledger_operation = options.get("execute_ledger_operation", False)
        bearer_token = options.get("bearer_token")

        if execute_ledger_operation and not bearer_token:
            raise InvalidInput(
                "Bearer token must be provided to execute ledger operation"
            )
        if spec_info == EbsiDidSpecInfos.KEY:
            raise InvalidInput(
                f"Type {spec_info.type} not supported. "
                "Natural person EBSI DIDs are did:key DIDs"
            )
        if not kms:
            raise InvalidInput("No KMS value provided")

        method_specific_id = options.get(
            "method_specific_id"
        ) or generate_ebsi_method_specific_id(spec_info, random=self.random)

        private_key_length = spec_info.private_key_length or 32
        # capabilityInvocation purpose
        controller_import = self._importable_key(
            options.get("secp256k1_key"),
            KeyType.SECP256K1,
            kms,
            private_key_length,
            is_controller=True,
        )
        # authentication, assertionMethod purposes
        assertion_import = self._importable_key(
            options.get("secp256r1_key"), KeyType.SECP256R1, kms, private_key_length
        )
        secp256k1_key = await self.key_manager.import_key(controller_import)
        secp256r1_key = await self.key_manager.import_key(assertion_import)

        identifier = Identifier(
            did=f"{spec_info.method}{method_specific_id}",
            controller_key_id=secp256k1_key.kid,
            keys=[secp256k1_key, secp256r1_key],
            alias=alias,
            provider=self.PROVIDER,
        )

        if execute_ledger_operation:
            not_before = options.get("not_before") or int(time.time())
            not_after = options.get("not_after") or MAX_NOT_AFTER
            relationship = self._creation_relationship(secp256r1_key)
            await self.orchestrator.execute(
                [
                    insert_did_document_step(
                        identifier.did,
                        secp256k1_key,
                        not_before=not_before,
                        not_after=not_after,
                        base_document=options.get("base_document"),
                    ),
                    add_verification_method_step(
                        identifier.did, secp256k1_key, secp256r1_key
                    ),
                    add_verification_method_relationship_step(
                        identifier.did,
                        secp256k1_key,
                        secp256r1_key,
                        relationship,
                        not_before=not_before,
                        not_after=not_after,
                    ),
                ],
                kid=secp256k1_key.kid,
                bearer_token=bearer_token,
                rpc_id=options.get("rpc_id"),
                api_opts=merge_api_opts(self.api_opts, options.get("api_opts")),
            )

        LOGGER.info("Created %s", identifier.did)
        return identifier

    async def add_key(
        self, identifier: Identifier, key: KeyDescriptor, options: dict
    ) -> List:
        """Register a key and its verification relationships on the ledger.

        Options:
            bearer_token: access token
            vm_relationships: non-empty list of relationship names
            rpc_id, not_before, not_after, api_opts
        """
        options = dict(options or {})
        bearer_token = options.get("bearer_token")
        relationships = self._relationships(options.get("vm_relationships"))
        if not bearer_token:
            raise InvalidInput("Bearer token must be provided to add a key")

        controller_key = identifier.controller_key
        not_before = options.get("not_before") or int(time.time())
        not_after = options.get("not_after") or MAX_NOT_AFTER
        steps = [add_verification_method_step(identifier.did, controller_key, key)]
        steps.extend(
            add_verification_method_relationship_step(
                identifier.did,
                controller_key,
                key,
                relationship,
                not_before=not_before,
                not_after=not_after,
            )
            for relationship in relationships
        )
        receipts = await self.orchestrator.execute(
            steps,
            kid=controller_key.kid,
            bearer_token=bearer_token,
            rpc_id=options.get("rpc_id"),
            api_opts=merge_api_opts(self.api_opts, options.get("api_opts")),
        )
        identifier.add_key(key)
        return receipts

    async def add_service(
        self, identifier: Identifier, service: Service, options: dict
    ):
        """Register a service endpoint on the ledger.

        Options:
            bearer_token: access token
            rpc_id, api_opts
        """
        options = dict(options or {})
        bearer_token = options.get("bearer_token")
        if not bearer_token:
            raise InvalidInput("Bearer token must be provided to add a service")

        controller_key = identifier.controller_key
        receipts = await self.orchestrator.execute(
            [add_service_step(identifier.did, controller_key, service)],
            kid=controller_key.kid,
            bearer_token=bearer_token,
            rpc_id=options.get("rpc_id"),
            api_opts=merge_api_opts(self.api_opts, options.get("api_opts")),
        )
        identifier.add_service(service)
        return receipts[0]

    async def delete_identifier(self, identifier: Identifier) -> bool:
        """Forget an identifier.

        The DID document is not deactivated on the ledger.
        """
        LOGGER.warning(
            "Deleting %s does not deactivate it on the EBSI ledger", identifier.did
        )
        return True

    async def remove_key(
        self, identifier: Identifier, kid: str, options: Optional[dict] = None
    ):
        """Not supported."""
        raise UnsupportedOperationError(
            "Removing keys is not implemented for the EBSI registrar"
        )

    async def remove_service(
        self, identifier: Identifier, service_id: str, options: Optional[dict] = None
    ):
        """Not supported."""
        raise UnsupportedOperationError(
            "Removing services is not implemented for the EBSI registrar"
        )

    async def update_identifier(
        self, identifier: Identifier, document: dict, options: Optional[dict] = None
    ) -> Identifier:
        """Not supported."""
        raise UnsupportedOperationError(
            "Updating DID documents is not implemented for the EBSI registrar"
        )

    def _importable_key(
        self,
        key_opts: Optional[Mapping],
        key_type: KeyType,
        kms: str,
        private_key_length: int,
        is_controller: bool = False,
    ) -> ImportableKey:
        key_opts = dict(key_opts or {})
        key_type = KeyType.from_value(key_opts.get("type") or key_type)
        if is_controller and key_type is not KeyType.SECP256K1:
            raise InvalidInput(
                "Controller key must be {}, not {}".format(
                    KeyType.SECP256K1.value, key_type.value
                )
            )
        provided = key_opts.get("private_key_hex")
        try:
            provided = bytes.fromhex(strip_hex_prefix(provided)) if provided else None
        except ValueError as err:
            raise InvalidInput("Private key must be hex encoded") from err
        private_key_hex = generate_private_key_hex(
            private_key_length, provided, random=self.random
        )
        return ImportableKey(
            kms=kms,
            type=key_type,
            private_key_hex=private_key_hex,
            kid=key_opts.get("kid"),
            purposes=assign_purposes(key_type, key_opts.get("purposes")),
            is_controller=is_controller,
        )

    @staticmethod
    def _creation_relationship(key: KeyDescriptor) -> KeyPurpose:
        if not key.purposes or KeyPurpose.ASSERTION_METHOD in key.purposes:
            return KeyPurpose.ASSERTION_METHOD
        return sorted(key.purposes, key=lambda purpose: purpose.value)[0]

    @staticmethod
    def _relationships(names: Optional[Sequence[str]]) -> List[KeyPurpose]:
        if isinstance(names, str):
            names = [names]
        names = list(names or [])
        if not names:
            raise InvalidInput("No verification method relationship provided")
        to_purposes(names)
        # request order, without duplicates
        return list(dict.fromkeys(KeyPurpose(name) for name in names))
