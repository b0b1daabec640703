"""ABI fragments for the deployed IdeaForge contract suite.

Only the functions and events the API touches are listed. Keys of
``CONTRACT_ABIS`` match :meth:`ideaforge.config.Settings.contract_addresses`.
"""

from __future__ import annotations

from typing import Any


def _fn(name: str, inputs: list[tuple[str, str]], outputs: list[Any], mutability: str) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": arg, "type": typ, "internalType": typ} for arg, typ in inputs],
        "outputs": outputs,
        "stateMutability": mutability,
    }


def _out(typ: str, name: str = "") -> dict[str, Any]:
    return {"name": name, "type": typ, "internalType": typ}


def _event(name: str, inputs: list[tuple[str, str, bool]]) -> dict[str, Any]:
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": [
            {"name": arg, "type": typ, "internalType": typ, "indexed": indexed}
            for arg, typ, indexed in inputs
        ],
    }


IDEA_SUBMISSION_COMPONENTS = [
    ("ideaId", "uint256"),
    ("submitter", "address"),
    ("title", "string"),
    ("description", "string"),
    ("category", "string"),
    ("contentHash", "string"),
    ("metadataHash", "string"),
    ("submissionTime", "uint256"),
    ("aiCredibilityScore", "uint256"),
    ("isApproved", "bool"),
    ("isMinted", "bool"),
    ("validator", "address"),
    ("validationNotes", "string"),
    ("mintedTokenId", "uint256"),
]

IP_DATA_OUTPUTS = [
    ("creator", "address"),
    ("creationTime", "uint256"),
    ("aiScore", "uint256"),
    ("category", "string"),
    ("description", "string"),
    ("isLicensed", "bool"),
    ("licensePrice", "uint256"),
    ("royaltyFee", "uint96"),
]

FORGE_TOKEN_ABI = [
    _fn("name", [], [_out("string")], "view"),
    _fn("symbol", [], [_out("string")], "view"),
    _fn("totalSupply", [], [_out("uint256")], "view"),
    _fn("balanceOf", [("account", "address")], [_out("uint256")], "view"),
    _fn("getVotes", [("account", "address")], [_out("uint256")], "view"),
]

IP_NFT_ABI = [
    _fn("ownerOf", [("tokenId", "uint256")], [_out("address")], "view"),
    _fn("tokenURI", [("tokenId", "uint256")], [_out("string")], "view"),
    _fn(
        "getIPData",
        [("tokenId", "uint256")],
        [_out(typ, name) for name, typ in IP_DATA_OUTPUTS],
        "view",
    ),
    _fn("getCreatorTokens", [("creator", "address")], [_out("uint256[]")], "view"),
    _fn("licenseIP", [("tokenId", "uint256"), ("price", "uint256")], [], "payable"),
    _event(
        "IPNFTCreated",
        [("tokenId", "uint256", True), ("creator", "address", True), ("category", "string", False)],
    ),
    _event(
        "IPNFTLicensed",
        [("tokenId", "uint256", True), ("licensee", "address", True), ("price", "uint256", False)],
    ),
]

IDEA_FORGE_CORE_ABI = [
    _fn(
        "submitIdea",
        [
            ("title", "string"),
            ("description", "string"),
            ("category", "string"),
            ("contentHash", "string"),
            ("metadataHash", "string"),
        ],
        [],
        "payable",
    ),
    _fn(
        "approveIdea",
        [("ideaId", "uint256"), ("aiCredibilityScore", "uint256"), ("validationNotes", "string")],
        [],
        "nonpayable",
    ),
    _fn(
        "mintIPNFT",
        [("ideaId", "uint256"), ("tokenURI", "string"), ("royaltyFee", "uint96")],
        [],
        "nonpayable",
    ),
    _fn(
        "getIdeaSubmission",
        [("ideaId", "uint256")],
        [
            {
                "name": "",
                "type": "tuple",
                "internalType": "struct IdeaForgeCore.IdeaSubmission",
                "components": [_out(typ, name) for name, typ in IDEA_SUBMISSION_COMPONENTS],
            }
        ],
        "view",
    ),
    _fn("getUserSubmissions", [("user", "address")], [_out("uint256[]")], "view"),
    _event(
        "IdeaSubmitted",
        [
            ("ideaId", "uint256", True),
            ("submitter", "address", True),
            ("title", "string", False),
            ("category", "string", False),
            ("contentHash", "string", False),
        ],
    ),
    _event(
        "IdeaApproved",
        [("ideaId", "uint256", True), ("validator", "address", True), ("aiCredibilityScore", "uint256", False)],
    ),
    _event(
        "IPNFTMinted",
        [("ideaId", "uint256", True), ("tokenId", "uint256", True), ("creator", "address", True)],
    ),
]

DAO_ABI = [
    _fn(
        "proposeWithMetadata",
        [
            ("targets", "address[]"),
            ("values", "uint256[]"),
            ("calldatas", "bytes[]"),
            ("description", "string"),
            ("proposalType", "uint8"),
            ("title", "string"),
            ("externalLink", "string"),
        ],
        [_out("uint256")],
        "nonpayable",
    ),
    _fn("castVote", [("proposalId", "uint256"), ("support", "uint8")], [_out("uint256")], "nonpayable"),
    _fn("state", [("proposalId", "uint256")], [_out("uint8")], "view"),
    _event(
        "ProposalCreated",
        [
            ("proposalId", "uint256", False),
            ("proposer", "address", False),
            ("proposalType", "uint8", False),
            ("title", "string", False),
        ],
    ),
]

REVENUE_SPLITTER_ABI = [
    _fn("getCreatorEarnings", [("creator", "address")], [_out("uint256")], "view"),
    _fn("claimCreatorEarnings", [("amount", "uint256")], [], "nonpayable"),
]

CONTRACT_ABIS: dict[str, list[dict[str, Any]]] = {
    "forgeToken": FORGE_TOKEN_ABI,
    "ipNFT": IP_NFT_ABI,
    "ideaForgeCore": IDEA_FORGE_CORE_ABI,
    "dao": DAO_ABI,
    "revenueSplitter": REVENUE_SPLITTER_ABI,
}
