"""Replay a recorded session of server notifications through the client.

Each line of the recording is a JSON object ``{"event": name, "data": payload}``.
Outbound requests the client would have sent are printed instead.

    python -m flyingchess.replay session.jsonl --player-id p1 --render human
"""

import argparse
import asyncio
import json

from .bridge import EventBridge


def load_recording(path):
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                record = json.loads(line)
                yield record["event"], record.get("data") or {}


async def replay(bridge, records, pause):
    for name, payload in records:
        bridge.handle(name, payload)
        await bridge.wait_for_animations()
        await asyncio.sleep(pause)


def main():
    parser = argparse.ArgumentParser(description="Replay a recorded Flying Chess session.")
    parser.add_argument("recording", help="JSON-lines file of server notifications.")
    parser.add_argument("--game-id", default="replay", help="Game id to join as.")
    parser.add_argument("--player-id", default=None, help="Local player id.")
    parser.add_argument(
        "--render",
        choices=["human", "rgb_array", "none"],
        default="human",
        help="Render mode (default: human).",
    )
    parser.add_argument("--step-delay", type=float, default=0.3, help="Seconds per animation step.")
    parser.add_argument("--pause", type=float, default=0.5, help="Seconds between notifications.")
    args = parser.parse_args()

    def emit(name, payload):
        print(f"-> {name} {json.dumps(payload)}")

    def notify(notice):
        print(f"[{notice.level}] {notice.message}")

    render_mode = None if args.render == "none" else args.render
    bridge = EventBridge(emit, notify=notify, step_delay=args.step_delay, render_mode=render_mode)
    if args.player_id:
        bridge.join(args.game_id, args.player_id)

    print(f"Replaying {args.recording}")
    asyncio.run(replay(bridge, load_recording(args.recording), args.pause))

    for line in bridge.log_lines:
        print(line)
    bridge.board.close()
    print("\nReplay finished.")


if __name__ == "__main__":
    main()
