"""
Profiler configuration.

Defaults come from environment variables so a deployment can tune them
without touching the command line; the CLI flags override them per run.
"""

import os

from pydantic import BaseModel, Field

# Configuration from environment variables
CONNECT_TIMEOUT = float(os.getenv("PROFILER_CONNECT_TIMEOUT", "5"))  # seconds, per address
IO_TIMEOUT = float(os.getenv("PROFILER_IO_TIMEOUT", "3"))  # seconds, read and write
USER_AGENT = os.getenv("PROFILER_USER_AGENT", "curl/7.58.0")
READ_CHUNK_SIZE = 4096


class ProfilerConfig(BaseModel):
    connect_timeout: float = Field(default=CONNECT_TIMEOUT, gt=0)
    io_timeout: float = Field(default=IO_TIMEOUT, gt=0)
    user_agent: str = Field(default=USER_AGENT, min_length=1)
    read_chunk_size: int = Field(default=READ_CHUNK_SIZE, gt=0)
