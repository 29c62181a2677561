#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from websockets.asyncio.client import ClientConnection, connect

logging.basicConfig(level=logging.INFO)

MENU = {"1": "BET", "2": "CALL", "3": "FOLD"}

# ManualClient plays the human seat of the practice server from a terminal.


@dataclass
class ActContext:
    hand_no: int
    legal: list[str]
    to_call: int
    min_raise_to: int
    max_bet: int


class ManualClient:
    def __init__(self, team: str, url: str) -> None:
        self.team = team
        self.url = url
        self.websocket: Optional[ClientConnection] = None
        self.seat: Optional[int] = None

    async def run(self) -> None:
        async with connect(self.url) as ws:
            self.websocket = ws
            await self._send({"type": "hello", "v": 1, "team": self.team})
            await self._loop()

    async def _loop(self) -> None:
        assert self.websocket is not None
        while True:
            raw = await self.websocket.recv()
            msg = json.loads(raw)
            msg_type = msg.get("type")
            self._print_message(msg)

            if msg_type == "act":
                await self._send(self._prompt_action(msg))
            elif msg_type == "next_hand":
                answer = input("Press Enter to continue to next hand (or type 'quit' to exit): ")
                await self._send({"type": "quit" if answer.strip().lower() == "quit" else "continue"})
            elif msg_type in ("match_end", "error"):
                break

    def _prompt_action(self, msg: Dict[str, Any]) -> Dict[str, Any]:
        ctx = ActContext(
            hand_no=msg["hand_no"],
            legal=list(msg.get("legal", [])),
            to_call=msg.get("to_call", 0),
            min_raise_to=msg.get("min_raise_to", 0),
            max_bet=msg.get("max_bet", 0),
        )
        print("1. Bet/Raise  2. Call  3. Fold")
        while True:
            choice = input("Enter your choice (1-3): ").strip()
            name = MENU.get(choice)
            if name is None or not ctx.legal or name in ctx.legal:
                break
            print(f"{name} is not allowed right now; legal actions: {', '.join(ctx.legal)}")
        payload: Dict[str, Any] = {"type": "action", "v": 1, "hand_no": ctx.hand_no, "action": choice}
        if choice == "1":
            prompt = f"Bet to how much? (min raise {ctx.min_raise_to}, max {ctx.max_bet}): "
            payload["amount"] = input(prompt).strip()
        elif choice == "2" and ctx.to_call:
            print(f"Calling {ctx.to_call} chips")
        return payload

    def _print_message(self, msg: Dict[str, Any]) -> None:
        msg_type = msg.get("type", "")
        print(f"\n>>> {msg_type.upper()}")
        if msg_type == "welcome":
            self.seat = msg.get("seat")
            print(f"Seat: {self.seat}, config: {json.dumps(msg['config'])}")
        elif msg_type == "start_hand":
            stacks = ", ".join(f"{entry['name']}:{entry['chips']}" for entry in msg.get("stacks", []))
            print(f"Hand {msg['hand_no']} dealer={msg['dealer']} | {stacks}")
        elif msg_type == "act":
            you = msg.get("you", {})
            print(f"Your hand: {', '.join(you.get('hand', []))} ({you.get('rank')})")
            print(
                f"Pot={msg.get('pot')} | your bet={you.get('bet')} chips={you.get('chips')} | "
                f"to call={msg.get('to_call')}"
            )
        elif msg_type == "event":
            summary = {k: v for k, v in msg.items() if k not in {"type", "v", "ev"}}
            print(f"Event {msg.get('ev')}: {summary}")
        elif msg_type == "end_hand":
            print(f"Result: {msg.get('outcome')} winner={msg.get('winner')} | stacks: {msg.get('stacks')}")
        elif msg_type == "error":
            print(f"Error {msg.get('code')}: {msg.get('msg')}")
        elif msg_type == "match_end":
            print(f"Winner: {msg.get('winner')} | stacks: {msg.get('final_stacks')}")
        else:
            print(json.dumps(msg, indent=2))

    async def _send(self, payload: Dict[str, Any]) -> None:
        assert self.websocket is not None
        await self.websocket.send(json.dumps(payload))


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Five card draw practice client")
    parser.add_argument("--url", default="ws://127.0.0.1:9876/ws")
    parser.add_argument("--team", required=True)
    return parser.parse_args(argv)


def main(argv: list[str]) -> None:
    args = parse_args(argv)
    client = ManualClient(team=args.team, url=args.url)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        print("\nSession closed")


if __name__ == "__main__":
    main(sys.argv[1:])
