"""
Transaction signatures.

The signer commits to an ordered instruction sequence through its challenge:

    challenge = Hasher32(InstructionSignature).chain(instructions).result()

and signs that 32-byte challenge with Schnorr over Ristretto255. A verifier
recomputes the challenge from the presented instructions; reordering or
altering any instruction changes the challenge and the signature no longer
verifies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence

from ..errors import InvalidSignature, MalformedInput
from ..hashing import EngineHashDomainLabel, hasher32
from ..logging import get_logger
from ..types.core import Hash
from ..wallet.keys import PublicKey, SecretKey
from ..wallet.signer import Signature, derive_public, sign_message
from .instruction import Instruction

log = get_logger(__name__)

__all__ = ["instruction_challenge", "TransactionSignature"]


def instruction_challenge(instructions: Sequence[Instruction]) -> Hash:
    return hasher32(EngineHashDomainLabel.InstructionSignature).chain(list(instructions)).result()


@dataclass(frozen=True, slots=True)
class TransactionSignature:
    public_key: PublicKey
    signature: Signature

    @classmethod
    def sign(cls, secret_key: SecretKey, instructions: Sequence[Instruction]) -> "TransactionSignature":
        """
        Sign *instructions* in their given order.

        Raises SigningFailure if the signature primitive rejects the challenge.
        """
        public_key = derive_public(secret_key)
        challenge = instruction_challenge(instructions)
        signature = sign_message(secret_key, bytes(challenge))
        log.debug(
            "instructions signed",
            extra={"public_key": public_key.hex(), "challenge": challenge.hex(), "count": len(instructions)},
        )
        return cls(public_key, signature)

    def verify(self, instructions: Sequence[Instruction]) -> bool:
        challenge = instruction_challenge(instructions)
        return self.signature.verify(self.public_key, bytes(challenge))

    def check(self, instructions: Sequence[Instruction]) -> None:
        """Like `verify` but raises InvalidSignature on mismatch."""
        if not self.verify(instructions):
            raise InvalidSignature("signature does not match instruction challenge", public_key=self.public_key.hex())

    def to_cbor(self) -> Any:
        return {"public_key": self.public_key, "signature": self.signature}

    def to_json(self) -> Dict[str, Any]:
        return {"public_key": self.public_key.hex(), "signature": self.signature.to_json()}

    @classmethod
    def from_json(cls, d: Any) -> "TransactionSignature":
        if not isinstance(d, dict) or "public_key" not in d or "signature" not in d:
            raise MalformedInput("transaction signature needs public_key and signature", field="signature")
        return cls(PublicKey.from_hex(d["public_key"], field="public_key"), Signature.from_json(d["signature"]))
