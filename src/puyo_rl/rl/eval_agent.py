from __future__ import annotations

import argparse
import sys

import numpy as np
import pygame

from puyo_rl.rl.train_ppo import make_env
from puyo_rl.visualization.renderer import Renderer


def _print_progress(ep_idx: int, total: int, score: int, chains: int) -> None:
    width = 30
    filled = int(width * (ep_idx + 1) / max(1, total))
    bar = "=" * filled + "." * (width - filled)
    msg = f"\r[{bar}] {ep_idx + 1}/{total}  score={score}  chains={chains}"
    print(msg, end="", file=sys.stdout, flush=True)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--model", type=str, required=True)
    p.add_argument("--episodes", type=int, default=10)
    p.add_argument("--gravity_every", type=int, default=2)
    p.add_argument("--render", action="store_true", help="Watch the agent in a pygame window")
    p.add_argument("--fps", type=int, default=10)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    from stable_baselines3 import PPO

    env = make_env("Puyo-12x6-v0", gravity_every=args.gravity_every)
    model = PPO.load(args.model, device="auto")
    game = env.unwrapped.game

    screen = None
    clock = None
    renderer = Renderer(cell_size=30)
    if args.render:
        pygame.init()
        screen = pygame.display.set_mode(renderer.window_size(game.grid.rows, game.grid.cols))
        pygame.display.set_caption("Puyo - Agent Eval")
        clock = pygame.time.Clock()

    scores = []
    chains = []
    try:
        for ep in range(args.episodes):
            seed = None if args.seed is None else args.seed + ep
            obs, info = env.reset(seed=seed)
            done = False
            while not done:
                if screen is not None:
                    for event in pygame.event.get():
                        if event.type == pygame.QUIT:
                            return
                action, _ = model.predict(obs, deterministic=True)
                obs, reward, terminated, truncated, info = env.step(action)
                done = terminated or truncated
                if screen is not None:
                    renderer.draw(screen, game, f"episode {ep + 1}")
                    clock.tick(args.fps)
            scores.append(info["score"])
            chains.append(info["chain_count"])
            _print_progress(ep, args.episodes, info["score"], info["chain_count"])
    finally:
        if screen is not None:
            pygame.quit()
        env.close()

    print()
    print(f"mean score {np.mean(scores):.1f}  max score {max(scores)}  mean chains {np.mean(chains):.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
