from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import dataclass, replace
from http import HTTPStatus
from typing import Any, Dict, Optional

from websockets.asyncio.server import ServerConnection, serve
from websockets.exceptions import ConnectionClosed

from drawpoker.cards import ParseError
from drawpoker.evaluator import evaluate_tokens
from drawpoker.game import HandRound
from drawpoker.match import Match
from drawpoker.models import HUMAN, Action, ActionType, TableConfig, action_from_menu

LOGGER = logging.getLogger("practice_host")

LEGAL_ACTIONS = [ActionType.BET.value, ActionType.CALL.value, ActionType.FOLD.value]


class PracticeServerError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


def _config_payload(config: TableConfig) -> Dict[str, Any]:
    return {
        "variant": "FIVE_CARD_DRAW",
        "seats": 2,
        "starting_stack": config.starting_stack,
        "sb": config.sb,
        "bb": config.bb,
    }


async def _send_error(websocket: ServerConnection, code: str, msg: str) -> None:
    await websocket.send(json.dumps({"type": "error", "code": code, "msg": msg}))


@dataclass
class RemoteClient:
    name: str
    websocket: ServerConnection

    async def send_json(self, payload: Dict[str, Any]) -> None:
        await self.websocket.send(json.dumps({"v": 1, **payload}))

    async def recv_json(self) -> Dict[str, Any]:
        raw = await self.websocket.recv()
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            raise PracticeServerError("BAD_JSON", "Messages must be JSON objects") from None
        if not isinstance(message, dict):
            raise PracticeServerError("BAD_JSON", "Messages must be JSON objects")
        return message


# One remote human per connection, seated against the house bot.


class PracticeSession:
    """Plays one heads-up match with the remote client in the human seat."""

    def __init__(self, config: TableConfig, remote: RemoteClient) -> None:
        self.match = Match(config)
        self.remote = remote

    async def run(self) -> None:
        while not self.match.is_over():
            hand = self.match.start_hand()
            await self.remote.send_json({"type": "start_hand", **self.match.start_hand_payload()})
            for event in hand.events:
                await self.remote.send_json({"type": "event", **event})

            action = await self._prompt_remote(hand)
            for event in hand.play_action(action):
                await self.remote.send_json({"type": "event", **event})

            result = self.match.finish_hand()
            await self.remote.send_json(
                {"type": "end_hand", "hand_no": hand.hand_no, **result.payload(), "stacks": self.match.state.stacks()}
            )
            if self.match.is_over():
                break
            if not await self._ask_continue():
                LOGGER.info("%s left after %s hands", self.remote.name, self.match.hand_counter)
                break

        await self.remote.send_json({"type": "match_end", **self.match.match_result_payload()})

    def act_payload(self, hand: HandRound) -> Dict[str, Any]:
        human, house = hand.human, hand.house
        return {
            "hand_no": hand.hand_no,
            "seat": HUMAN,
            "pot": hand.state.pot,
            "you": {
                "hand": list(human.hand),
                "rank": evaluate_tokens(human.hand).name,
                "chips": human.chips,
                "bet": human.bet,
            },
            "opponent": {"chips": house.chips, "bet": house.bet},
            "legal": list(LEGAL_ACTIONS),
            **hand.guidance(),
        }

    async def _prompt_remote(self, hand: HandRound) -> Action:
        await self.remote.send_json({"type": "act", **self.act_payload(hand)})
        while True:
            message = await self.remote.recv_json()
            if message.get("type") != "action":
                continue
            return action_from_menu(str(message.get("action", "")), message.get("amount"))

    async def _ask_continue(self) -> bool:
        await self.remote.send_json({"type": "next_hand", "prompt": "continue or quit"})
        while True:
            message = await self.remote.recv_json()
            msg_type = message.get("type")
            if msg_type == "continue":
                return True
            if msg_type == "quit":
                return False


async def handle_connection(websocket: ServerConnection, config: TableConfig) -> None:
    hello_raw = await websocket.recv()
    try:
        hello = json.loads(hello_raw)
    except (TypeError, ValueError):
        hello = None
    if not isinstance(hello, dict) or hello.get("type") != "hello":
        await _send_error(websocket, "BAD_HELLO", "Expected hello")
        return

    team_raw = hello.get("team")
    team = team_raw.strip() if isinstance(team_raw, str) else ""
    if not team:
        team = "REMOTE"

    remote = RemoteClient(name=team, websocket=websocket)
    await remote.send_json({
        "type": "welcome",
        "table_id": "PRACTICE",
        "seat": HUMAN,
        "config": _config_payload(config),
    })

    session = PracticeSession(replace(config, human_name=team), remote)
    try:
        await session.run()
    except PracticeServerError as exc:
        await _send_error(websocket, exc.code, exc.msg)
    except ConnectionClosed:
        LOGGER.info("%s disconnected mid-match", team)
    except ParseError:
        LOGGER.exception("Deck produced an unreadable card; closing session for %s", team)
        raise


async def _process_request(connection: ServerConnection, request):
    """Return a simple HTTP response for health checks."""

    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None  # let the WebSocket handshake continue

    if request.path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "practice server running\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")


async def run_server(host: str, port: int, config: TableConfig) -> None:
    async def _handler(ws: ServerConnection) -> None:
        await handle_connection(ws, config)

    async with serve(_handler, host, port, process_request=_process_request):
        LOGGER.info("Practice server listening on %s:%s", host, port)
        await asyncio.Future()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Remote vs house-bot five card draw server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=9876)
    parser.add_argument("--starting-stack", type=int, default=1_000)
    parser.add_argument("--sb", type=int, default=25)
    parser.add_argument("--bb", type=int, default=50)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    config = TableConfig(starting_stack=args.starting_stack, sb=args.sb, bb=args.bb, seed=args.seed)
    asyncio.run(run_server(args.host, args.port, config))


if __name__ == "__main__":
    main()
