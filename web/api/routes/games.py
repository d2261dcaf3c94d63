"""Game API routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from web.api.session_manager import GameSession, StrategyFactory, session_manager

router = APIRouter(tags=["games"])


# Request/Response models
class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    players: int = Field(1, ge=1, le=4, description="Number of players (1 = solo)")
    seed: int | None = Field(None, description="Random seed for reproducibility")
    strategy: str | None = Field(None, description="Strategy for the auto endpoint")
    strategy_params: dict[str, Any] = Field(
        default_factory=dict, description="Strategy parameters"
    )


class PlayRequest(BaseModel):
    """Request to play cards from the acting player's hand."""

    indices: list[int] = Field(..., description="Hand positions of the cards to play")
    next_player: int | None = Field(
        None, description="Who acts after a Jester card (multi-player only)"
    )


class DiscardRequest(BaseModel):
    """Request to discard cards to survive the enemy attack."""

    indices: list[int] = Field(..., description="Hand positions of the cards to discard")


class StrategyInfo(BaseModel):
    """Information about an available strategy."""

    name: str
    description: str


def _get_session(game_id: str) -> GameSession:
    session = session_manager.get_session(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _response(session: GameSession, event=None) -> dict:
    body = {
        "game_id": session.id,
        "state": session.to_client_state(),
        "legal_actions": session.actions_to_client(session.legal_actions),
    }
    if event is not None:
        body["messages"] = list(event.messages)
    return body


# REST Endpoints


@router.get("/strategies", response_model=list[StrategyInfo])
async def list_strategies():
    """List available AI strategies."""
    factory = StrategyFactory()
    strategies = factory.list_strategies()
    return [StrategyInfo(name=name, description=desc) for name, desc in strategies.items()]


@router.post("/games", response_model=dict)
async def create_game(request: CreateGameRequest):
    """Create a new game session."""
    try:
        session = session_manager.create_session(
            players=request.players,
            seed=request.seed,
            strategy_name=request.strategy,
            strategy_params=request.strategy_params,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _response(session)


@router.get("/games", response_model=list[dict])
async def list_games():
    """List all active game sessions."""
    return session_manager.list_sessions()


@router.get("/games/{game_id}")
async def get_game(game_id: str):
    """Get current state of a game."""
    session = _get_session(game_id)
    body = _response(session)
    body["action_history"] = session.action_history
    return body


@router.get("/games/{game_id}/actions")
async def get_legal_actions(game_id: str):
    """Get legal actions for the current game state."""
    session = _get_session(game_id)
    return {"actions": session.actions_to_client(session.legal_actions)}


@router.post("/games/{game_id}/play")
async def play_cards(game_id: str, request: PlayRequest):
    """Play cards (Step 1)."""
    session = _get_session(game_id)
    event = session.play(request.indices, next_player=request.next_player)
    return _response(session, event)


@router.post("/games/{game_id}/discard")
async def discard_cards(game_id: str, request: DiscardRequest):
    """Discard cards to survive the enemy attack (Step 4)."""
    session = _get_session(game_id)
    event = session.discard(request.indices)
    return _response(session, event)


@router.post("/games/{game_id}/jester")
async def use_jester(game_id: str):
    """Use a solo Jester charge to refresh the hand."""
    session = _get_session(game_id)
    event = session.use_jester()
    return _response(session, event)


@router.post("/games/{game_id}/yield")
async def yield_turn(game_id: str):
    """Yield instead of playing."""
    session = _get_session(game_id)
    event = session.yield_turn()
    return _response(session, event)


@router.post("/games/{game_id}/auto")
async def auto_action(game_id: str):
    """Let the session's strategy take the next action."""
    session = _get_session(game_id)
    if session.strategy is None:
        raise HTTPException(status_code=400, detail="Game has no strategy")
    event = session_manager.run_ai_action(session)
    return _response(session, event)


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if session_manager.delete_session(game_id):
        return {"deleted": True}
    raise HTTPException(status_code=404, detail="Game not found")
