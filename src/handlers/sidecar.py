import signal
import sys
import threading
from concurrent import futures

from pydantic import ValidationError

from src.lib.clients.task_metadata import TaskMetadataClient
from src.lib.config import SidecarConfig
from src.lib.constants import EXIT_CODE_FAILURE
from src.lib.cores.polling_loop_core import MetricsSidecar
from src.lib.logger import logger

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def install_shutdown_handlers(shutdown_event: threading.Event) -> None:
    def _handle_signal(signum, __):
        logger.info(f"Signal received: {signal.Signals(signum).name}")
        shutdown_event.set()

    for shutdown_signal in SHUTDOWN_SIGNALS:
        signal.signal(shutdown_signal, _handle_signal)


def run_sidecar(config: SidecarConfig, shutdown_event: threading.Event) -> int:
    """
    Runs the polling loop on a worker thread while the calling thread stays free to receive signals.
    """
    metadata_client = TaskMetadataClient(
        base_url=config.metadata_base_url,
        timeout=config.request_timeout_seconds,
        max_attempts=config.max_attempts,
        retry_delay=config.retry_delay_seconds,
    )
    sidecar = MetricsSidecar(config=config, metadata_client=metadata_client, shutdown_event=shutdown_event)

    with futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="metrics-sidecar") as executor:
        return executor.submit(sidecar.run).result()


def main() -> None:
    try:
        config = SidecarConfig.from_env()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(EXIT_CODE_FAILURE)

    logger.info(f"Starting with {config=}")
    shutdown_event = threading.Event()
    install_shutdown_handlers(shutdown_event)
    sys.exit(run_sidecar(config, shutdown_event))


if __name__ == "__main__":
    main()
