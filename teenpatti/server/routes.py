"""
HTTP API Routes for the Teen Patti table.

These routes handle table setup, round control and human actions.
Automated seats act on their own through the session's clock; clients
poll ``/get_game_state`` (or use the WebSocket) to see their moves.
"""

from typing import Dict, Any, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException

from teenpatti.config import config
from teenpatti.core.clock import AsyncioClock
from teenpatti.core.game import TeenPattiGame
from teenpatti.core.rules import ActionType, ConfigurationError
from teenpatti.server.schemas import ActionRequest, GameStateSchema, InitTableRequest
from teenpatti.table import TableSession

logger = logging.getLogger(__name__)

router = APIRouter()

# Single table for the HTTP surface; WebSocket clients get their own
_session: Optional[TableSession] = None


def build_session(req: InitTableRequest) -> TableSession:
    """
    Create a table session backed by the event loop clock.

    Raises:
        ConfigurationError: If the table cannot be built
    """
    game = TeenPattiGame(
        num_bots=req.bot_count,
        boot_amount=req.boot_amount,
        starting_chips=req.starting_chips,
        human_name=req.human_name,
    )
    return TableSession(game, clock=AsyncioClock(), think_range=config.think_range)


def get_session() -> TableSession:
    """Get the current table session."""
    if _session is None:
        raise HTTPException(status_code=400, detail="Table not initialized")
    return _session


def parse_action(action_type: str) -> ActionType:
    try:
        return ActionType(action_type.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {action_type}")


@router.post("/init_table")
async def init_table(req: InitTableRequest) -> Dict[str, Any]:
    """
    Set up a new table with one human seat and ``bot_count`` bots.
    """
    global _session

    try:
        _session = build_session(req)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Table initialized with {req.bot_count} bots, boot {req.boot_amount}")
    return {
        "success": True,
        "message": f"Table initialized with {req.bot_count + 1} seats",
        "player_count": req.bot_count + 1,
    }


@router.post("/start_round")
async def start_round(session: TableSession = Depends(get_session)) -> Dict[str, Any]:
    """
    Start a new round: post boot, shuffle and deal.
    """
    if not session.start_round():
        raise HTTPException(status_code=400, detail="Cannot start round")

    return {
        "success": True,
        "message": f"Round #{session.game.round_number} started",
        "round_number": session.game.round_number,
    }


@router.get("/get_game_state", response_model=GameStateSchema)
async def get_game_state(
    player_id: str = "0",
    session: TableSession = Depends(get_session),
) -> Dict[str, Any]:
    """
    Get the round state as seen by ``player_id`` (the human seat by default).
    """
    return session.get_state(for_player_id=player_id)


@router.get("/legal_actions")
async def get_legal_actions(
    player_id: str = "0",
    session: TableSession = Depends(get_session),
) -> Dict[str, Any]:
    """
    Get legal actions for a seat.
    """
    if not session.game.is_round_running():
        return {"actions": [], "message": "No round in progress"}

    return {"actions": session.game.get_legal_actions(player_id)}


@router.post("/take_action")
async def take_action(
    req: ActionRequest,
    session: TableSession = Depends(get_session),
) -> Dict[str, Any]:
    """
    Take a round action for the human seat.

    Illegal actions leave the round untouched and report why.
    """
    action_type = parse_action(req.action_type)
    result = session.take_action(req.player_id, action_type)

    if not result.success:
        return {"success": False, "error": result.message}

    response: Dict[str, Any] = {
        "success": True,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "amount": result.amount,
    }

    game = session.game
    if game.outcome is not None:
        response["outcome"] = game.outcome.to_dict()
        response["winners"] = game.get_winners()

    return response


@router.post("/new_round")
async def new_round(session: TableSession = Depends(get_session)) -> Dict[str, Any]:
    """
    Clear a finished round. Chips carry over.
    """
    if not session.new_round():
        raise HTTPException(status_code=400, detail="Round still in progress")
    return {"success": True, "message": "Ready for a new round"}


@router.post("/reset_table")
async def reset_table(session: TableSession = Depends(get_session)) -> Dict[str, Any]:
    """
    Full reset: every seat back to the starting chips.
    """
    session.reset_table()
    return {"success": True, "message": "Table reset"}
