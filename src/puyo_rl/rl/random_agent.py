from __future__ import annotations

import argparse

import gymnasium as gym

import puyo_rl.env  # noqa: F401
from puyo_rl.game import print_grid


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = gym.make("Puyo-12x6-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            print(f"episode {episodes}: score={info['score']} chains={info['chain_count']}")
            obs, info = env.reset()
    print_grid(obs["grid"])
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
