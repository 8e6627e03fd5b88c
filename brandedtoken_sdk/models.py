"""
Data models for the BrandedToken SDK.
"""
from typing import Dict, Any, Optional, List, Sequence
from pydantic import BaseModel, ConfigDict, Field


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    model_config = ConfigDict(populate_by_name=True)

    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: str = Field(..., alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    contract_address: Optional[str] = Field(None, alias="contractAddress")
    logs: List[Dict[str, Any]] = Field(default_factory=list)


class StakeRequest(BaseModel):
    """Stake request record held by the BrandedToken contract"""
    staker: str
    stake: int
    nonce: int

    @classmethod
    def from_call_result(cls, result: Sequence[Any]) -> "StakeRequest":
        staker, stake, nonce = result
        return cls(staker=staker, stake=stake, nonce=nonce)


class GatewayComposerStakeRequest(BaseModel):
    """Stake request record held by the GatewayComposer contract"""
    stake_vt: int
    mint_bt: int
    gateway: str
    beneficiary: str
    gas_price: int
    gas_limit: int
    nonce: int

    @classmethod
    def from_call_result(cls, result: Sequence[Any]) -> "GatewayComposerStakeRequest":
        stake_vt, mint_bt, gateway, beneficiary, gas_price, gas_limit, nonce = result
        return cls(
            stake_vt=stake_vt,
            mint_bt=mint_bt,
            gateway=gateway,
            beneficiary=beneficiary,
            gas_price=gas_price,
            gas_limit=gas_limit,
            nonce=nonce,
        )
