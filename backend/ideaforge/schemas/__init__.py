"""Pydantic schemas for the IdeaForge API surface."""

# purpose: aggregate request and response schemas for routes and gateways
# status: active

from .ai import (
    AIHealth,
    AIValidationResult,
    AnalyzeContentRequest,
    ContentAnalysis,
    GenerateMetadataRequest,
    ValidateIdeaRequest,
)
from .auth import (
    VerifiedUser,
    VerifyTokenResponse,
    WalletAuthRequest,
    WalletAuthResponse,
    WalletUser,
)
from .common import ADDRESS_PATTERN, DECIMAL_AMOUNT_PATTERN, CamelModel, failure, now_ms, ok
from .dao import (
    CreateProposalRequest,
    CreateProposalResponse,
    DAOParameters,
    ProposalStateResponse,
    ProposalType,
    VoteRequest,
    VoteResponse,
    VotingPowerResponse,
)
from .ideas import (
    ApproveIdeaRequest,
    ApproveIdeaResponse,
    IdeaSubmissionView,
    MintIPNFTRequest,
    MintIPNFTResponse,
    SubmitIdeaRequest,
    SubmitIdeaResponse,
)
from .ipfs import (
    EncodedFile,
    FileInfo,
    IdeaFile,
    PinRequest,
    PinResponse,
    UnpinResponse,
    UploadFileRequest,
    UploadJSONRequest,
    UploadResult,
    VerifyResponse,
)
from .nfts import IPNFTView, LicenseIPRequest, LicenseIPResponse
from .payments import (
    BalanceResponse,
    ClaimEarningsRequest,
    ClaimEarningsResponse,
    EarningsResponse,
    FeesResponse,
)
