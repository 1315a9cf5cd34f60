"""
Agent base class
Every pipeline step is an agent with typed input and output.
"""

import time
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from loguru import logger

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """
    Agent base class

    run() checks the input, does the work, checks the output and logs
    how long it took. Failures are logged under the agent's name and
    re-raised unchanged.
    """

    name: str = "BaseAgent"

    def __init__(self):
        self.logger = logger.bind(agent=self.name)

    def run(self, input_data: InputT) -> OutputT:
        started = time.perf_counter()
        try:
            self._validate_input(input_data)
            output = self._process(input_data)
            self._validate_output(output)
        except Exception as e:
            self.logger.error(f"{self.name} error: {e}")
            raise

        self.logger.debug(f"{self.name} done in {(time.perf_counter() - started) * 1000:.0f}ms")
        return output

    @abstractmethod
    def _process(self, input_data: InputT) -> OutputT:
        """The agent's work"""

    def _validate_input(self, input_data: InputT) -> None:
        if input_data is None:
            raise ValueError(f"{self.name}: no input given.")

    def _validate_output(self, output_data: OutputT) -> None:
        if output_data is None:
            raise ValueError(f"{self.name}: produced no output.")
