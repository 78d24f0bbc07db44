"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict
from pydantic import BaseModel, Field


# ============= Request Schemas =============

class InitTableRequest(BaseModel):
    """Request to set up a table."""
    bot_count: int = Field(ge=1, le=30, default=2)
    boot_amount: int = Field(gt=0, default=5)
    starting_chips: int = Field(ge=0, default=1000)
    human_name: str = Field(default="You", min_length=1, max_length=32)


class ActionRequest(BaseModel):
    """Request to take a round action."""
    action_type: str = Field(..., description="Action type: SEE_CARDS, FOLD, CALL, RAISE, SHOW")
    player_id: str = Field(default="0", description="Seat taking the action")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerSchema(BaseModel):
    """Seat information, cards only when visible to the viewer."""
    id: str
    name: str
    kind: str
    seat: int
    chips: int
    total_bet: int
    is_blind: bool
    has_seen: bool
    has_folded: bool
    last_action: Optional[str] = None
    card_count: int
    cards: Optional[List[CardSchema]] = None


class OutcomeSchema(BaseModel):
    """How the round ended."""
    kind: str
    winner_ids: List[str]
    payouts: Dict[str, int]
    pot: int
    unawarded: int
    title: str
    text: str


class PublicInfoSchema(BaseModel):
    """Public round information."""
    phase: str
    round_number: int
    pot: int
    boot_amount: int
    current_stake: int
    dealer_index: int
    active_index: int
    current_player: Optional[str] = None
    players: List[PlayerSchema]
    action_log: List[str]
    outcome: Optional[OutcomeSchema] = None


class HandRankSchema(BaseModel):
    category: int
    name: str
    tiebreak: List[int]


class PrivateInfoSchema(BaseModel):
    """Private round information for the viewing seat."""
    hand: List[CardSchema] = []
    hand_description: Optional[str] = None
    hand_rank: Optional[HandRankSchema] = None
    is_turn: bool = False
    available_moves: List[str] = []
    call_amount: int = 0
    raise_amount: int = 0
    can_show: bool = False


class GameStateSchema(BaseModel):
    """Complete round state."""
    public_info: PublicInfoSchema
    private_info: PrivateInfoSchema


# ============= WebSocket Message Schemas =============

class WSJoinMessage(BaseModel):
    """WebSocket join message."""
    type: str = "join"
    session_id: str


class WSActionMessage(BaseModel):
    """WebSocket action message."""
    type: str = "action"
    action: str  # SEE_CARDS, FOLD, CALL, RAISE, SHOW


class WSErrorMessage(BaseModel):
    """WebSocket error message."""
    type: str = "error"
    message: str
