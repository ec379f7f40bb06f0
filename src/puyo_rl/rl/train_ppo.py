from __future__ import annotations

import argparse
import os

import gymnasium as gym

# Ensure envs are registered
import puyo_rl.env  # noqa: F401
from puyo_rl.env.wrappers import OneHotGridWrapper


def make_env(env_id: str, seed: int | None = None, gravity_every: int = 2) -> gym.Env:
    env = gym.make(env_id, gravity_every=gravity_every)
    env = OneHotGridWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--gravity_every", type=int, default=2,
                   help="Apply one gravity tick every N agent actions")
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_puyo.zip")
    p.add_argument("--n_envs", type=int, default=4)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()

    from stable_baselines3 import PPO
    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    def make_env_idx(i: int):
        def thunk():
            seed = None if args.seed is None else args.seed + i
            return make_env("Puyo-12x6-v0", seed=seed, gravity_every=args.gravity_every)
        return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = PPO(
        policy="MultiInputPolicy",
        env=vec_env,
        verbose=1,
        seed=args.seed,
        tensorboard_log=args.logdir,
    )

    os.makedirs(os.path.dirname(args.save_path) or ".", exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)
    vec_env.close()


if __name__ == "__main__":  # pragma: no cover
    main()
