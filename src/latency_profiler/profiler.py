"""
Measurement loop: one fresh connection per attempt, run sequentially.
"""

import logging
from typing import Optional

from latency_profiler.config import ProfilerConfig
from latency_profiler.connect import Connector
from latency_profiler.errors import AttemptError
from latency_profiler.models import ProfileRun, Target
from latency_profiler.request import format_request
from latency_profiler.response import fetch

logger = logging.getLogger(__name__)


class Profiler:
    def __init__(
        self,
        target: Target,
        number_of_requests: int,
        config: Optional[ProfilerConfig] = None,
        connector: Optional[Connector] = None,
    ):
        self.config = config or ProfilerConfig()
        self.connector = connector or Connector(target, self.config)
        self.run = ProfileRun(target=target, number_of_requests=number_of_requests)
        # the path and host never change between attempts
        self.formatted_request = format_request(target, self.config.user_agent)

    @property
    def target(self) -> Target:
        return self.run.target

    def attempt(self) -> None:
        """
        Run one attempt and record its outcome.

        FatalProfilerError from the connector is not caught here: it means
        no attempt can succeed, so it ends the whole session.
        """
        try:
            connection = self.connector.open()
            with connection:
                response = fetch(connection, self.formatted_request, self.config.read_chunk_size)
        except AttemptError as e:
            logger.debug(f"Attempt against {self.target} failed: {e}")
            self.run.failed_responses.append(e.to_record())
            return
        logger.debug(f"HTTP {response.status_code} from {self.target} in {response.time_taken * 1000:.2f} ms")
        self.run.successful_responses.append(response)

    def profile(self) -> ProfileRun:
        """Main entrypoint: run every attempt and return the finished run."""
        logger.info(f"Profiling {self.target} with {self.run.number_of_requests} request(s)")
        for idx in range(self.run.number_of_requests):
            self.attempt()
            if (idx + 1) % 20 == 0:
                logger.info(f"Progress: {idx + 1}/{self.run.number_of_requests} requests completed")
        return self.run
