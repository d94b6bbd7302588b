import sys

from aws_lambda_powertools import Logger

from src.lib.constants import SERVICE_NAME

# stdout is left to the workload sharing the task's log stream
logger = Logger(service=SERVICE_NAME, stream=sys.stderr)
