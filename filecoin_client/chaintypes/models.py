"""Chain data returned by a node, decoded from its JSON form."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import Any

from filecoin_client.chaintypes.message import Message
from filecoin_client.chaintypes.signed_message import SignedMessage
from filecoin_client.sigs import Signature, SigType, new_from_string


def _cid(value: dict | None) -> str | None:
    return None if value is None else value["/"]


def _cids(values: list | None) -> list[str]:
    return [_cid(item) for item in values or []]


def _bytes(value: str | None) -> bytes:
    return b"" if value is None else base64.b64decode(value)


def _decimal(value: Any) -> Decimal:
    return Decimal(0) if value is None else Decimal(str(value))


def _big(value: Any) -> int:
    return 0 if value is None else int(value)


def _duration(nanoseconds: int | None) -> timedelta:
    return timedelta(microseconds=(nanoseconds or 0) / 1000)


def _signature(value: dict | None) -> Signature | None:
    if value is None:
        return None
    return Signature(SigType(value["Type"]), _bytes(value.get("Data")))


def _message(value: dict | None) -> Message | None:
    if value is None:
        return None
    params = value.get("Params")
    return Message(
        to=new_from_string(value["To"]),
        from_=new_from_string(value["From"]),
        version=value.get("Version", 0),
        nonce=value.get("Nonce", 0),
        value=_big(value.get("Value")),
        gas_limit=value.get("GasLimit", 0),
        gas_fee_cap=_big(value.get("GasFeeCap")),
        gas_premium=_big(value.get("GasPremium")),
        method=value.get("Method", 0),
        params=None if params is None else base64.b64decode(params),
    )


def _signed_message(value: dict | None) -> SignedMessage | None:
    if value is None:
        return None
    return SignedMessage(_message(value.get("Message")), _signature(value.get("Signature")))


@dataclass
class Version:
    """Version information reported by a node."""

    version: str = ""
    api_version: int = 0
    block_delay: int = 0

    @classmethod
    def from_json(cls, data: dict) -> Version:
        return cls(data.get("Version", ""), data.get("APIVersion", 0), data.get("BlockDelay", 0))


@dataclass
class BeaconEntry:
    """A randomness beacon round."""

    round: int = 0
    data: bytes = b""

    @classmethod
    def from_json(cls, data: dict) -> BeaconEntry:
        return cls(data.get("Round", 0), _bytes(data.get("Data")))


@dataclass
class IpldObject:
    """An IPLD node and its content identifier."""

    cid: str | None = None
    obj: Any = None

    @classmethod
    def from_json(cls, data: dict) -> IpldObject:
        return cls(_cid(data.get("Cid")), data.get("Obj"))


@dataclass
class ObjStat:
    """Size and link count of a stored object."""

    size: int = 0
    links: int = 0

    @classmethod
    def from_json(cls, data: dict) -> ObjStat:
        return cls(data.get("Size", 0), data.get("Links", 0))


@dataclass
class MessageSendSpec:
    """Limits applied when the node fills in and sends a message."""

    max_fee: int = 0

    @classmethod
    def from_json(cls, data: dict) -> MessageSendSpec:
        return cls(_big(data.get("MaxFee")))


@dataclass
class BlockMessages:
    """The messages included in one block."""

    bls_messages: list[Message] = field(default_factory=list)
    secpk_messages: list[SignedMessage] = field(default_factory=list)
    cids: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> BlockMessages:
        return cls(
            [_message(item) for item in data.get("BlsMessages") or []],
            [_signed_message(item) for item in data.get("SecpkMessages") or []],
            _cids(data.get("Cids")),
        )


@dataclass
class Actor:
    """An actor's code, state head, nonce and balance."""

    code: str | None = None
    head: str | None = None
    nonce: int = 0
    balance: Decimal = Decimal(0)

    @classmethod
    def from_json(cls, data: dict) -> Actor:
        return cls(
            _cid(data.get("Code")),
            _cid(data.get("Head")),
            data.get("Nonce", 0),
            _decimal(data.get("Balance")),
        )


@dataclass
class Ticket:
    """The election ticket of a block."""

    vrf_proof: bytes = b""

    @classmethod
    def from_json(cls, data: dict) -> Ticket:
        return cls(_bytes(data.get("VRFProof")))


@dataclass
class BlockHeader:
    """The header of a block."""

    miner: str = ""
    ticket: Ticket | None = None
    parents: list[str] = field(default_factory=list)
    parent_weight: Decimal = Decimal(0)
    height: int = 0
    parent_state_root: str | None = None
    parent_message_receipts: str | None = None
    messages: str | None = None
    bls_aggregate: Signature | None = None
    timestamp: int = 0
    block_sig: Signature | None = None
    fork_signaling: int = 0
    parent_base_fee: Decimal = Decimal(0)

    @classmethod
    def from_json(cls, data: dict) -> BlockHeader:
        ticket = data.get("Ticket")
        return cls(
            miner=data.get("Miner", ""),
            ticket=None if ticket is None else Ticket.from_json(ticket),
            parents=_cids(data.get("Parents")),
            parent_weight=_decimal(data.get("ParentWeight")),
            height=data.get("Height", 0),
            parent_state_root=_cid(data.get("ParentStateRoot")),
            parent_message_receipts=_cid(data.get("ParentMessageReceipts")),
            messages=_cid(data.get("Messages")),
            bls_aggregate=_signature(data.get("BLSAggregate")),
            timestamp=data.get("Timestamp", 0),
            block_sig=_signature(data.get("BlockSig")),
            fork_signaling=data.get("ForkSignaling", 0),
            parent_base_fee=_decimal(data.get("ParentBaseFee")),
        )


@dataclass
class TipSet:
    """A set of blocks at one height."""

    cids: list[str] = field(default_factory=list)
    blocks: list[BlockHeader] = field(default_factory=list)
    height: int = 0

    @classmethod
    def from_json(cls, data: dict) -> TipSet:
        return cls(
            _cids(data.get("Cids")),
            [BlockHeader.from_json(item) for item in data.get("Blocks") or []],
            data.get("Height", 0),
        )


@dataclass
class HeadChange:
    """A change of the chain head."""

    type: str = ""
    val: TipSet | None = None

    @classmethod
    def from_json(cls, data: dict) -> HeadChange:
        val = data.get("Val")
        return cls(data.get("Type", ""), None if val is None else TipSet.from_json(val))


@dataclass
class MessageReceipt:
    """The outcome of executing a message; exit code 0 means success."""

    exit_code: int = 0
    return_value: bytes = b""
    gas_used: int = 0

    @classmethod
    def from_json(cls, data: dict) -> MessageReceipt:
        return cls(data.get("ExitCode", 0), _bytes(data.get("Return")), data.get("GasUsed", 0))


def _receipt(value: dict | None) -> MessageReceipt | None:
    return None if value is None else MessageReceipt.from_json(value)


@dataclass
class Loc:
    """A source location in an execution trace."""

    file: str = ""
    line: int = 0
    function: str = ""

    @classmethod
    def from_json(cls, data: dict) -> Loc:
        return cls(data.get("File", ""), data.get("Line", 0), data.get("Function", ""))


@dataclass
class GasTrace:
    """One gas charge made during execution."""

    name: str = ""
    location: list[Loc] = field(default_factory=list)
    total_gas: int = 0
    compute_gas: int = 0
    storage_gas: int = 0
    total_virtual_gas: int = 0
    virtual_compute_gas: int = 0
    virtual_storage_gas: int = 0
    time_taken: timedelta = timedelta(0)
    extra: Any = None

    @classmethod
    def from_json(cls, data: dict) -> GasTrace:
        return cls(
            name=data.get("Name", ""),
            location=[Loc.from_json(item) for item in data.get("loc") or []],
            total_gas=data.get("tg", 0),
            compute_gas=data.get("cg", 0),
            storage_gas=data.get("sg", 0),
            total_virtual_gas=data.get("vtg", 0),
            virtual_compute_gas=data.get("vcg", 0),
            virtual_storage_gas=data.get("vsg", 0),
            time_taken=_duration(data.get("tt")),
            extra=data.get("ex"),
        )


@dataclass
class ExecutionTrace:
    """The trace of a message's execution and the calls it made."""

    msg: Message | None = None
    msg_rct: MessageReceipt | None = None
    error: str = ""
    duration: timedelta = timedelta(0)
    gas_charges: list[GasTrace] = field(default_factory=list)
    subcalls: list[ExecutionTrace] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> ExecutionTrace:
        return cls(
            msg=_message(data.get("Msg")),
            msg_rct=_receipt(data.get("MsgRct")),
            error=data.get("Error", ""),
            duration=_duration(data.get("Duration")),
            gas_charges=[GasTrace.from_json(item) for item in data.get("GasCharges") or []],
            subcalls=[ExecutionTrace.from_json(item) for item in data.get("Subcalls") or []],
        )


@dataclass
class InvocResult:
    """The result of replaying a message."""

    msg: Message | None = None
    msg_rct: MessageReceipt | None = None
    execution_trace: ExecutionTrace = field(default_factory=ExecutionTrace)
    error: str = ""
    duration: timedelta = timedelta(0)

    @classmethod
    def from_json(cls, data: dict) -> InvocResult:
        return cls(
            msg=_message(data.get("Msg")),
            msg_rct=_receipt(data.get("MsgRct")),
            execution_trace=ExecutionTrace.from_json(data.get("ExecutionTrace") or {}),
            error=data.get("Error", ""),
            duration=_duration(data.get("Duration")),
        )


@dataclass
class MsgLookup:
    """Where a message landed on chain and its receipt."""

    message: str | None = None
    receipt: MessageReceipt = field(default_factory=MessageReceipt)
    return_dec: Any = None
    tipset: list[str] = field(default_factory=list)
    height: int = 0

    @classmethod
    def from_json(cls, data: dict) -> MsgLookup:
        return cls(
            message=_cid(data.get("Message")),
            receipt=MessageReceipt.from_json(data.get("Receipt") or {}),
            return_dec=data.get("ReturnDec"),
            tipset=_cids(data.get("TipSet")),
            height=data.get("Height", 0),
        )