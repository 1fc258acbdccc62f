from __future__ import annotations
import numpy as np
import gymnasium as gym
from gymnasium import spaces

from alphadocte.entropy import EntropyMaximizer
from alphadocte.exceptions import ArgumentError
from alphadocte.game import Game
from alphadocte.rules import WordleGameRules
from alphadocte.sampler import WordSampler


class GymGameEnv(gym.Env):
    """
    Gymnasium wrapper around a Wordle Game, tracked by an EntropyMaximizer.
    - Observation: 2 floats [remaining entropy in bits, step / max_guesses]
    - Action space: Discrete(len(dictionary)), the index of the guessed word
    - Reward: bits of information gained by the guess - step_penalty,
      + success_bonus when the secret is found
    - info contains an 'action_mask' (int8 array) of the words that may still be the secret.
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        rules: WordleGameRules,
        sampler: WordSampler,
        step_penalty: float = 1.0,
        success_bonus: float = 10.0,
    ) -> None:
        if not isinstance(rules, WordleGameRules):
            raise ArgumentError("rules must be WordleGameRules")
        if not isinstance(sampler, WordSampler):
            raise ArgumentError("sampler must be a WordSampler")
        if rules.max_guesses == 0:
            raise ArgumentError("the environment needs a bounded number of guesses")

        self.rules = rules
        self.sampler = sampler
        self.dictionary = rules.dictionary
        self.step_penalty = float(step_penalty)
        self.success_bonus = float(success_bonus)

        self.game = Game(rules)
        self.solver = EntropyMaximizer(rules)
        self._last_mask = None  # caches latest action mask for action-masking wrappers

        self.observation_space = spaces.Box(
            low=0.0, high=np.inf, shape=(2,), dtype=np.float32
        )
        # Actions: indices into the dictionary
        self.action_space = spaces.Discrete(len(self.dictionary))

    # ---------- Helpers ----------

    def _observation(self) -> np.ndarray:
        entropy = max(self.solver.compute_current_entropy(), 0.0)
        step_scaled = self.game.nb_guess / self.rules.max_guesses
        return np.array([entropy, step_scaled], dtype=np.float32)

    def _mask(self) -> np.ndarray:
        mask = np.zeros(len(self.dictionary), dtype=np.int8)
        for word in self.solver.potential_solutions:
            mask[self.dictionary.index_of(word)] = 1
        self._last_mask = mask
        return mask

    # ---------- Gymnasium API ----------

    def reset(self, *, seed: int | None = None, options: dict | None = None):
        # Follow Gymnasium reset protocol
        super().reset(seed=seed)
        if seed is not None:
            self.sampler.set_seed(seed)

        secret = (options or {}).get("secret") or self.sampler.choice_word()

        self.game.reset()
        self.game.set_word(secret)
        self.game.start()
        self.solver.set_template(self.rules.get_template(self.game))

        info = {"action_mask": self._mask()}
        return self._observation(), info

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise gym.error.InvalidAction(f"Invalid action: {action}")

        guess = self.dictionary.word_at(action)
        # information measured against the candidates before the hint is applied
        hints = self.game.try_guess(guess)
        gained = max(self.solver.compute_actual_entropy(guess, hints), 0.0)
        self.solver.add_hint(guess, hints)

        terminated = self.game.is_won
        truncated = self.game.is_over and not terminated

        reward = gained - self.step_penalty
        if terminated:
            reward += self.success_bonus

        info = {
            "guess": guess,
            "hints": [int(h) for h in hints],
            "info_gain": float(gained),
            "remaining": len(self.solver.potential_solutions),
            "secret": self.game.word if self.game.is_over else None,
            "action_mask": self._mask(),
        }
        return self._observation(), float(reward), bool(terminated), bool(truncated), info

    def get_action_mask(self) -> np.ndarray:
        """
        Return the latest valid action mask as an int8 numpy array.
        This is useful for sb3-contrib's ActionMasker wrapper, which expects
        env.unwrapped.get_action_mask() to be available.
        """
        if self._last_mask is None:
            _, info = self.reset()
            return info["action_mask"]
        return self._last_mask
