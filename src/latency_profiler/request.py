from latency_profiler.models import Target


def format_request(target: Target, user_agent: str) -> str:
    return (
        f"GET {target.request_path} HTTP/1.1\r\n"
        f"Host: {target.host_header}\r\n"
        f"User-Agent: {user_agent}\r\n"
        f"Accept: */*\r\n"
        f"Connection: close\r\n"
        f"\r\n"
    )
