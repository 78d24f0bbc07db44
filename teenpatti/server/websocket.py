"""
WebSocket handling for real-time table updates.

This module provides:
- SessionManager: one table session per browser session id
- WebSocket endpoint: handles the human's commands and pushes state
  after every change, including moves made by bots
"""

from __future__ import annotations
from typing import Dict, Optional, Any, Set
import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from teenpatti.config import config
from teenpatti.core.clock import AsyncioClock
from teenpatti.core.game import TeenPattiGame
from teenpatti.core.rules import ActionType
from teenpatti.server.schemas import WSActionMessage, WSErrorMessage, WSJoinMessage
from teenpatti.table import TableSession


logger = logging.getLogger(__name__)


class SessionManager:
    """
    Keeps one in-memory table per browser session.

    Usage:
        manager = SessionManager()
        session = manager.get_or_create("abc")
    """

    def __init__(self):
        self.sessions: Dict[str, TableSession] = {}

    def create(self, session_id: str) -> TableSession:
        game = TeenPattiGame(
            num_bots=config.bot_count,
            boot_amount=config.boot_amount,
            starting_chips=config.starting_chips,
            human_name=config.human_name,
        )
        session = TableSession(game, clock=AsyncioClock(), think_range=config.think_range)
        self.sessions[session_id] = session
        logger.info(f"Created table for session {session_id}")
        return session

    def get(self, session_id: str) -> Optional[TableSession]:
        return self.sessions.get(session_id)

    def get_or_create(self, session_id: str) -> TableSession:
        return self.get(session_id) or self.create(session_id)

    def remove(self, session_id: str) -> bool:
        """Drop a session and stop its bots. Returns False if it was unknown."""
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        logger.info(f"Removed table for session {session_id}")
        return True


def _human_id(session: TableSession) -> str:
    return next(p.player_id for p in session.game.players if p.is_human)


async def handle_message(session: TableSession, message: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle one client message.

    Returns:
        Response dict to send back to the client
    """
    msg_type = message.get("type", "")
    human_id = _human_id(session)

    if msg_type == "action":
        try:
            action_msg = WSActionMessage.model_validate(message)
            action_type = ActionType(action_msg.action.upper())
        except (ValidationError, ValueError):
            return WSErrorMessage(message=f"Invalid action: {message.get('action')}").model_dump()

        result = session.take_action(human_id, action_type)
        if not result.success:
            return WSErrorMessage(message=result.message).model_dump()
        return {
            "type": "action_result",
            "success": True,
            "action": action_type.value,
            "amount": result.amount,
        }

    elif msg_type == "start_round":
        if not session.start_round():
            return WSErrorMessage(message="Cannot start round").model_dump()
        return {"type": "round_started", "round_number": session.game.round_number}

    elif msg_type == "new_round":
        if not session.new_round():
            return WSErrorMessage(message="Round still in progress").model_dump()
        return {"type": "round_cleared"}

    elif msg_type == "reset":
        session.reset_table()
        return {"type": "table_reset"}

    elif msg_type == "get_state":
        return {"type": "state", **session.get_state(for_player_id=human_id)}

    return WSErrorMessage(message=f"Unknown message type: {msg_type}").model_dump()


# Global session manager instance
session_manager = SessionManager()


async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for table communication.

    Protocol:
    1. Client connects and sends: {"type": "join", "session_id": "..."}
    2. Server sends the table state
    3. Client sends commands: {"type": "action", "action": "CALL"},
       {"type": "start_round"}, {"type": "new_round"}, {"type": "reset"}
    4. Server pushes {"type": "state", ...} after every change

    The table is dropped once the last connection for its session closes.
    """
    session: Optional[TableSession] = None
    session_id: Optional[str] = None
    listener = None
    pushes: Set[asyncio.Task] = set()
    send_lock = asyncio.Lock()

    async def send(message: Dict[str, Any]) -> None:
        # One frame at a time, so pushes never interleave with replies
        async with send_lock:
            await websocket.send_json(message)

    def push_done(task: asyncio.Task) -> None:
        pushes.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"State push failed: {task.exception()}")

    try:
        await websocket.accept()
        try:
            join = WSJoinMessage.model_validate(await websocket.receive_json())
        except ValidationError:
            join = None

        if join is None or join.type != "join":
            await send(WSErrorMessage(message="First message must be join").model_dump())
            await websocket.close()
            return

        session_id = join.session_id
        session = session_manager.get_or_create(session_id)
        human_id = _human_id(session)
        loop = asyncio.get_running_loop()

        def listener(changed: TableSession) -> None:
            state = changed.get_state(for_player_id=human_id)
            task = loop.create_task(send({"type": "state", **state}))
            pushes.add(task)
            task.add_done_callback(push_done)

        session.add_listener(listener)
        logger.info(f"Session {session_id} joined")

        await send({"type": "state", **session.get_state(for_player_id=human_id)})

        while True:
            message = await websocket.receive_json()
            response = await handle_message(session, message)
            await send(response)

    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")
    finally:
        for task in list(pushes):
            task.cancel()
        if session is not None and listener is not None:
            session.remove_listener(listener)
            if session.listener_count == 0:
                session_manager.remove(session_id)
