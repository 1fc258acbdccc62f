import numpy as np
import gymnasium as gym
import pytest

from alphadocte.exceptions import ArgumentError
from alphadocte.gym_env import GymGameEnv
from alphadocte.rules import MotusGameRules
from alphadocte.sampler import WordSampler


@pytest.fixture
def env(wordle_rules, wordle_dictionary):
    return GymGameEnv(wordle_rules, WordSampler(wordle_dictionary, seed=42))


def test_env_needs_wordle_rules(motus_dictionary, wordle_dictionary):
    with pytest.raises(ArgumentError):
        GymGameEnv(MotusGameRules(motus_dictionary), WordSampler(motus_dictionary))
    with pytest.raises(ArgumentError):
        GymGameEnv(None, WordSampler(wordle_dictionary))


def test_gym_game_env_behavior(env, wordle_dictionary):
    # Reset returns (obs, info) where info carries the action mask
    obs, info = env.reset(seed=0)
    mask = info["action_mask"]

    assert obs.shape == (2,)
    assert env.observation_space.contains(obs)
    assert obs[0] == pytest.approx(np.log2(67))
    assert obs[1] == 0.0
    assert mask.shape[0] == len(wordle_dictionary)
    assert mask.dtype == np.int8
    assert np.sum(mask) == 67
    assert env.game.word in wordle_dictionary

    valid = np.nonzero(mask)[0]
    obs2, reward, terminated, truncated, info2 = env.step(int(valid[0]))

    assert obs2.shape == (2,)
    assert isinstance(reward, float)
    assert isinstance(terminated, bool)
    assert isinstance(truncated, bool)

    # Candidate set should not grow after a step
    new_mask = info2["action_mask"]
    assert new_mask.shape[0] == mask.shape[0]
    assert np.sum(new_mask) <= np.sum(mask)
    assert np.sum(new_mask) == info2["remaining"]
    assert np.array_equal(env.get_action_mask(), new_mask)


def test_fixed_secret_and_rewards(env, wordle_dictionary):
    _, info = env.reset(options={"secret": "amont"})
    assert env.game.word == "amont"

    agaca = wordle_dictionary.index_of("agaca")
    obs, reward, terminated, truncated, info = env.step(agaca)
    # 67 -> 3 candidates: aient, amont, arroi
    assert info["hints"] == [2, 0, 0, 0, 0]
    assert info["info_gain"] == pytest.approx(np.log2(67 / 3))
    assert reward == pytest.approx(np.log2(67 / 3) - 1.0)
    assert not terminated and not truncated
    assert obs[1] == pytest.approx(1 / 6)
    assert info["remaining"] == 3

    obs, reward, terminated, truncated, info = env.step(wordle_dictionary.index_of("amont"))
    assert terminated and not truncated
    assert info["info_gain"] == pytest.approx(np.log2(3))
    assert reward == pytest.approx(np.log2(3) - 1.0 + 10.0)
    assert info["secret"] == "amont"
    assert obs[0] == 0.0


def test_truncated_when_out_of_guesses(env, wordle_dictionary):
    env.reset(options={"secret": "amont"})
    theme = wordle_dictionary.index_of("theme")
    for _ in range(5):
        _, _, terminated, truncated, _ = env.step(theme)
        assert not terminated and not truncated
    _, reward, terminated, truncated, info = env.step(theme)
    assert truncated and not terminated
    assert reward == pytest.approx(-1.0)
    assert info["secret"] == "amont"


def test_invalid_action(env):
    env.reset()
    with pytest.raises(gym.error.InvalidAction):
        env.step(len(env.dictionary))
