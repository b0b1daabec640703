"""Contract calls against the deployed IdeaForge suite over JSON-RPC."""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from web3 import Web3
from web3.logs import DISCARD

from .. import schemas
from ..config import Settings
from ..errors import GatewayError, NotFound
from .contracts import CONTRACT_ABIS

# purpose: sign, send and read IdeaForge contract transactions for the route layer
# status: active
# depends_on: ideaforge.services.contracts, ideaforge.config.Settings

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

F = TypeVar("F", bound=Callable[..., Any])


class ChainError(GatewayError):
    """Raised when an RPC call, signing step or transaction fails."""


class TransactionReverted(ChainError):
    """Raised when a mined transaction reports status 0."""


class IdeaNotFound(NotFound):
    default_message = "Idea not found"


class TokenNotFound(NotFound):
    default_message = "IP-NFT not found"


@dataclass(frozen=True)
class SubmissionReceipt:
    tx_hash: str
    idea_id: int


@dataclass(frozen=True)
class MintReceipt:
    tx_hash: str
    token_id: int
    token_id_found: bool


@dataclass(frozen=True)
class ProposalReceipt:
    tx_hash: str
    proposal_id: int


def chain_operation(message: str) -> Callable[[F], F]:
    """Log any failure of the wrapped call and re-raise it as ``ChainError(message)``.

    ``NotFound`` passes through untouched so missing records still map to 404.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except NotFound:
                raise
            except Exception as exc:
                logger.error("%s (%s): %s", message, fn.__name__, exc, exc_info=True)
                raise ChainError(message) from exc

        return wrapper  # type: ignore[return-value]

    return decorator


def to_wei(amount: str) -> int:
    return int(Web3.to_wei(Decimal(amount), "ether"))


def format_ether(value: int) -> str:
    """Render wei as a decimal ether string, always with a fractional part."""

    text = format(Decimal(int(value)).scaleb(-18).normalize(), "f")
    return text if "." in text else f"{text}.0"


class ChainGateway:
    """Owns one RPC connection, one signing account and the five contract handles."""

    def __init__(self, w3: Web3, account: Any, contracts: Mapping[str, Any]):
        self.w3 = w3
        self.account = account
        self.contracts = dict(contracts)
        self._send_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainGateway":
        w3 = Web3(Web3.HTTPProvider(settings.rpc_url, request_kwargs={"timeout": 30}))
        account = w3.eth.account.from_key(settings.private_key)
        contracts = {
            name: w3.eth.contract(address=Web3.to_checksum_address(address), abi=CONTRACT_ABIS[name])
            for name, address in settings.contract_addresses().items()
        }
        logger.info("Chain gateway ready for signer %s", account.address)
        return cls(w3, account, contracts)

    # -- transactions -------------------------------------------------

    def _transact(self, call: Any, *, value: int = 0) -> tuple[str, Any]:
        """Build, sign and send ``call``; wait for the receipt outside the nonce lock."""

        with self._send_lock:
            tx = call.build_transaction(
                {
                    "from": self.account.address,
                    "nonce": self.w3.eth.get_transaction_count(self.account.address, "pending"),
                    "value": value,
                }
            )
            signed = self.account.sign_transaction(tx)
            raw_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash = Web3.to_hex(raw_hash)
        receipt = self.w3.eth.wait_for_transaction_receipt(raw_hash)
        if receipt["status"] != 1:
            raise TransactionReverted(f"transaction {tx_hash} reverted")
        return tx_hash, receipt

    def _event_arg(self, contract: str, event: str, receipt: Any, arg: str) -> Optional[int]:
        decoded = getattr(self.contracts[contract].events, event)().process_receipt(receipt, errors=DISCARD)
        if not decoded:
            return None
        return int(decoded[0]["args"][arg])

    @chain_operation("Failed to submit idea to blockchain")
    def submit_idea(
        self,
        title: str,
        description: str,
        category: str,
        content_hash: str,
        metadata_hash: str,
        fee_amount: str,
    ) -> SubmissionReceipt:
        call = self.contracts["ideaForgeCore"].functions.submitIdea(
            title, description, category, content_hash, metadata_hash
        )
        tx_hash, receipt = self._transact(call, value=to_wei(fee_amount))
        idea_id = self._event_arg("ideaForgeCore", "IdeaSubmitted", receipt, "ideaId")
        logger.info(
            "Idea submitted to blockchain tx=%s block=%s idea=%s",
            tx_hash,
            receipt.get("blockNumber"),
            idea_id,
        )
        return SubmissionReceipt(tx_hash=tx_hash, idea_id=idea_id or 0)

    @chain_operation("Failed to approve idea on blockchain")
    def approve_idea(self, idea_id: int, score: int, notes: str) -> str:
        call = self.contracts["ideaForgeCore"].functions.approveIdea(idea_id, score, notes)
        tx_hash, receipt = self._transact(call)
        logger.info("Idea %s approved tx=%s block=%s", idea_id, tx_hash, receipt.get("blockNumber"))
        return tx_hash

    @chain_operation("Failed to mint IP-NFT on blockchain")
    def mint_ipnft(self, idea_id: int, token_uri: str, royalty_fee_bps: int) -> MintReceipt:
        call = self.contracts["ideaForgeCore"].functions.mintIPNFT(idea_id, token_uri, royalty_fee_bps)
        tx_hash, receipt = self._transact(call)
        token_id = self._event_arg("ideaForgeCore", "IPNFTMinted", receipt, "tokenId")
        if token_id is None:
            token_id = self._event_arg("ipNFT", "IPNFTCreated", receipt, "tokenId")
        if token_id is None:
            logger.warning("Mint of idea %s succeeded (tx=%s) but no mint event was decoded", idea_id, tx_hash)
        logger.info("IP-NFT minted for idea %s token=%s tx=%s", idea_id, token_id, tx_hash)
        return MintReceipt(tx_hash=tx_hash, token_id=token_id or 0, token_id_found=token_id is not None)

    @chain_operation("Failed to license IP on blockchain")
    def license_ip(self, token_id: int, price: str) -> str:
        price_wei = to_wei(price)
        call = self.contracts["ipNFT"].functions.licenseIP(token_id, price_wei)
        tx_hash, _ = self._transact(call, value=price_wei)
        logger.info("IP %s licensed for %s tx=%s", token_id, price, tx_hash)
        return tx_hash

    @chain_operation("Failed to create DAO proposal")
    def create_dao_proposal(
        self,
        targets: Sequence[str],
        values: Sequence[str],
        calldatas: Sequence[str],
        description: str,
        proposal_type: int,
        title: str,
        external_link: str,
    ) -> ProposalReceipt:
        call = self.contracts["dao"].functions.proposeWithMetadata(
            [Web3.to_checksum_address(target) for target in targets],
            [int(value) for value in values],
            [Web3.to_bytes(hexstr=data) for data in calldatas],
            description,
            int(proposal_type),
            title,
            external_link,
        )
        tx_hash, receipt = self._transact(call)
        proposal_id = self._event_arg("dao", "ProposalCreated", receipt, "proposalId")
        logger.info("DAO proposal created id=%s tx=%s", proposal_id, tx_hash)
        return ProposalReceipt(tx_hash=tx_hash, proposal_id=proposal_id or 0)

    @chain_operation("Failed to vote on DAO proposal")
    def vote_on_proposal(self, proposal_id: int, support: int) -> str:
        call = self.contracts["dao"].functions.castVote(proposal_id, support)
        tx_hash, _ = self._transact(call)
        logger.info("Vote %s cast on proposal %s tx=%s", support, proposal_id, tx_hash)
        return tx_hash

    @chain_operation("Failed to claim creator earnings")
    def claim_creator_earnings(self, amount: str) -> str:
        call = self.contracts["revenueSplitter"].functions.claimCreatorEarnings(to_wei(amount))
        tx_hash, _ = self._transact(call)
        logger.info("Creator earnings of %s claimed tx=%s", amount, tx_hash)
        return tx_hash

    # -- reads --------------------------------------------------------

    @chain_operation("Failed to retrieve idea submission from blockchain")
    def get_idea_submission(self, idea_id: int) -> schemas.IdeaSubmissionView:
        raw = self.contracts["ideaForgeCore"].functions.getIdeaSubmission(idea_id).call()
        (
            raw_id,
            submitter,
            title,
            description,
            category,
            content_hash,
            metadata_hash,
            submission_time,
            score,
            is_approved,
            is_minted,
            validator,
            notes,
            minted_token_id,
        ) = raw
        if submitter == ZERO_ADDRESS:
            raise IdeaNotFound(f"Idea {idea_id} not found")
        return schemas.IdeaSubmissionView(
            idea_id=int(raw_id),
            submitter=submitter,
            title=title,
            description=description,
            category=category,
            content_hash=content_hash,
            metadata_hash=metadata_hash,
            submission_time=int(submission_time),
            ai_credibility_score=int(score),
            is_approved=bool(is_approved),
            is_minted=bool(is_minted),
            validator=validator,
            validation_notes=notes,
            minted_token_id=int(minted_token_id),
        )

    @chain_operation("Failed to retrieve user submissions from blockchain")
    def get_user_submissions(self, address: str) -> list[int]:
        ids = self.contracts["ideaForgeCore"].functions.getUserSubmissions(
            Web3.to_checksum_address(address)
        ).call()
        return [int(i) for i in ids]

    @chain_operation("Failed to retrieve IP-NFT data from blockchain")
    def get_ipnft_data(self, token_id: int) -> schemas.IPNFTView:
        creator, created, ai_score, category, description, licensed, price, royalty = (
            self.contracts["ipNFT"].functions.getIPData(token_id).call()
        )
        if creator == ZERO_ADDRESS:
            raise TokenNotFound(f"IP-NFT {token_id} not found")
        return schemas.IPNFTView(
            token_id=token_id,
            creator=creator,
            creation_time=int(created),
            ai_score=int(ai_score),
            category=category,
            description=description,
            is_licensed=bool(licensed),
            license_price=int(price),
            royalty_fee=int(royalty),
        )

    @chain_operation("Failed to retrieve creator tokens from blockchain")
    def get_creator_tokens(self, address: str) -> list[int]:
        ids = self.contracts["ipNFT"].functions.getCreatorTokens(Web3.to_checksum_address(address)).call()
        return [int(i) for i in ids]

    @chain_operation("Failed to retrieve FORGE token balance")
    def get_forge_token_balance(self, address: str) -> str:
        balance = self.contracts["forgeToken"].functions.balanceOf(Web3.to_checksum_address(address)).call()
        return format_ether(balance)

    @chain_operation("Failed to retrieve voting power")
    def get_voting_power(self, address: str) -> str:
        votes = self.contracts["forgeToken"].functions.getVotes(Web3.to_checksum_address(address)).call()
        return format_ether(votes)

    @chain_operation("Failed to retrieve proposal state")
    def get_proposal_state(self, proposal_id: int) -> int:
        return int(self.contracts["dao"].functions.state(proposal_id).call())

    @chain_operation("Failed to retrieve creator earnings")
    def get_creator_earnings(self, address: str) -> str:
        earnings = self.contracts["revenueSplitter"].functions.getCreatorEarnings(
            Web3.to_checksum_address(address)
        ).call()
        return format_ether(earnings)

    @chain_operation("Failed to retrieve current block number")
    def get_current_block_number(self) -> int:
        return int(self.w3.eth.block_number)

    @chain_operation("Failed to retrieve transaction receipt")
    def get_transaction_receipt(self, tx_hash: str) -> Optional[dict[str, Any]]:
        receipt = self.w3.eth.get_transaction_receipt(tx_hash)
        return dict(receipt) if receipt is not None else None
