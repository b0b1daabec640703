import os
os.environ["TESTING"] = "1"

TEST_ENV = {
    "POLYGON_RPC_URL": "http://127.0.0.1:8545",
    "PRIVATE_KEY": "0x" + "11" * 32,
    "ANTHROPIC_API_KEY": "test-anthropic-key",
    "PINATA_API_KEY": "test-pinata-key",
    "PINATA_SECRET_KEY": "test-pinata-secret",
    "FORGE_TOKEN_ADDRESS": "0x" + "1" * 40,
    "IP_NFT_ADDRESS": "0x" + "2" * 40,
    "IDEA_FORGE_CORE_ADDRESS": "0x" + "3" * 40,
    "DAO_ADDRESS": "0x" + "4" * 40,
    "REVENUE_SPLITTER_ADDRESS": "0x" + "5" * 40,
    "JWT_SECRET": "test-jwt-secret",
}
for _name, _value in TEST_ENV.items():
    os.environ.setdefault(_name, _value)

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[2]))

from ideaforge import schemas
from ideaforge.config import Settings
from ideaforge.dependencies import get_chain, get_inference, get_storage
from ideaforge.main import create_app
from ideaforge.services.chain import (
    IdeaNotFound,
    MintReceipt,
    ProposalReceipt,
    SubmissionReceipt,
    TokenNotFound,
)

TX_HASH = "0x" + "ab" * 32
WALLET = "0x" + "a" * 40

settings = Settings.from_env(TEST_ENV)
app = create_app(settings)


class FakeChain:
    """Records every call; ``fail_with`` makes the next calls raise."""

    def __init__(self):
        self.calls = []
        self.fail_with = None
        self.ideas = {}
        self.tokens = {}
        self.minted_token_id = 3
        self.token_id_found = True

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def called(self, name):
        return [args for op, args in self.calls if op == name]

    def submit_idea(self, title, description, category, content_hash, metadata_hash, fee_amount):
        self._record("submit_idea", title, description, category, content_hash, metadata_hash, fee_amount)
        return SubmissionReceipt(tx_hash=TX_HASH, idea_id=1)

    def approve_idea(self, idea_id, score, notes):
        self._record("approve_idea", idea_id, score, notes)
        return TX_HASH

    def mint_ipnft(self, idea_id, token_uri, royalty_fee_bps):
        self._record("mint_ipnft", idea_id, token_uri, royalty_fee_bps)
        return MintReceipt(
            tx_hash=TX_HASH,
            token_id=self.minted_token_id if self.token_id_found else 0,
            token_id_found=self.token_id_found,
        )

    def license_ip(self, token_id, price):
        self._record("license_ip", token_id, price)
        return TX_HASH

    def create_dao_proposal(self, targets, values, calldatas, description, proposal_type, title, external_link):
        self._record(
            "create_dao_proposal", targets, values, calldatas, description, proposal_type, title, external_link
        )
        return ProposalReceipt(tx_hash=TX_HASH, proposal_id=42)

    def vote_on_proposal(self, proposal_id, support):
        self._record("vote_on_proposal", proposal_id, support)
        return TX_HASH

    def claim_creator_earnings(self, amount):
        self._record("claim_creator_earnings", amount)
        return TX_HASH

    def get_idea_submission(self, idea_id):
        self._record("get_idea_submission", idea_id)
        if idea_id not in self.ideas:
            raise IdeaNotFound(f"Idea {idea_id} not found")
        return self.ideas[idea_id]

    def get_user_submissions(self, address):
        self._record("get_user_submissions", address)
        return [1, 2]

    def get_ipnft_data(self, token_id):
        self._record("get_ipnft_data", token_id)
        if token_id not in self.tokens:
            raise TokenNotFound(f"IP-NFT {token_id} not found")
        return self.tokens[token_id]

    def get_creator_tokens(self, address):
        self._record("get_creator_tokens", address)
        return [3]

    def get_forge_token_balance(self, address):
        self._record("get_forge_token_balance", address)
        return "12.5"

    def get_voting_power(self, address):
        self._record("get_voting_power", address)
        return "100.0"

    def get_proposal_state(self, proposal_id):
        self._record("get_proposal_state", proposal_id)
        return 1

    def get_creator_earnings(self, address):
        self._record("get_creator_earnings", address)
        return "0.25"


class FakeStorage:
    gateway_url = "https://gateway.pinata.cloud/ipfs/"

    def __init__(self):
        self.calls = []
        self.fail_with = None
        self.pin_result = True
        self.exists = True

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def called(self, name):
        return [args for op, args in self.calls if op == name]

    def _result(self, cid, size):
        return schemas.UploadResult(
            hash=cid, size=size, url=self.gateway_url + cid, pin_size=size, timestamp=schemas.now_ms()
        )

    def upload_file(self, data, filename, content_type):
        self._record("upload_file", data, filename, content_type)
        return self._result(f"QmFile{filename}", len(data))

    def upload_json(self, obj):
        self._record("upload_json", obj)
        return self._result("QmMetadata", 128)

    async def upload_multiple_files(self, files):
        self._record("upload_multiple_files", list(files))
        return [self._result(f"QmFile{name}", len(data)) for data, name, _ in files]

    def get_file_info(self, cid):
        self._record("get_file_info", cid)
        return schemas.FileInfo(hash=cid, size=42, type="text/plain", pinned=True)

    def pin_hash(self, cid):
        self.calls.append(("pin_hash", (cid,)))
        return self.pin_result

    def unpin_hash(self, cid):
        self.calls.append(("unpin_hash", (cid,)))
        return self.pin_result

    def verify_hash(self, cid):
        self.calls.append(("verify_hash", (cid,)))
        return self.exists


class FakeInference:
    def __init__(self):
        self.calls = []
        self.fail_with = None

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def validate_idea(self, title, description, category, content=None):
        self.calls.append(("validate_idea", (title, description, category, content)))
        return schemas.AIValidationResult(
            score=82,
            originality=90,
            quality=75,
            market_potential=80,
            category=category,
            suggestions=["Add a prototype"],
            risks=["Crowded market"],
            confidence=0.8,
            reasoning="Solid concept",
        )

    def analyze_content(self, content, content_type):
        self._record("analyze_content", content, content_type)
        return schemas.ContentAnalysis(
            summary="A short summary", keywords=["solar", "storage"], sentiment="positive", topics=["energy"]
        )

    def generate_metadata(self, title, description, category, ai_score):
        self._record("generate_metadata", title, description, category, ai_score)
        return '{"name": "%s"}' % title


@pytest.fixture
def fake_chain():
    chain = FakeChain()
    app.dependency_overrides[get_chain] = lambda: chain
    yield chain
    app.dependency_overrides.pop(get_chain, None)


@pytest.fixture
def fake_storage():
    storage = FakeStorage()
    app.dependency_overrides[get_storage] = lambda: storage
    yield storage
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture
def fake_inference():
    inference = FakeInference()
    app.dependency_overrides[get_inference] = lambda: inference
    yield inference
    app.dependency_overrides.pop(get_inference, None)


@pytest.fixture
def client(fake_chain, fake_storage, fake_inference):
    with TestClient(app) as c:
        yield c


def assert_envelope(body, success=True):
    assert body["success"] is success
    assert isinstance(body["timestamp"], int)
    if success:
        assert "error" not in body
    else:
        assert "data" not in body
        assert isinstance(body["error"], str)
