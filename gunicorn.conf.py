import logging.config
import multiprocessing
import re

import structlog

from config.settings.logging import pre_chain


cpu_count = multiprocessing.cpu_count()
max_workers = 8
workers = min(cpu_count * 2 + 1, max_workers)

timeout = 60
keepalive = 5
graceful_timeout = 30
max_requests = 1000
max_requests_jitter = 50

loglevel = "info"
errorlog = "-"
accesslog = "-"

access_log_format = (
    '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" host="%({Host}i)s"'
)

# Key generation is CPU bound; sync workers keep one rotation per worker
worker_class = "sync"
preload_app = True

ACCESS_LINE = re.compile(
    r"\s+".join(
        [
            r"(?P<client>\S+)",
            r"\S+",
            r"(?P<user>\S+)",
            r"\[(?P<time>.+)\]",
            r'"(?P<request>.+)"',
            r"(?P<status>[0-9]+)",
            r"(?P<size>\S+)",
            r'"(?P<referer>.*)"',
            r'"(?P<agent>.*)"',
            r'host="(?P<host_header>.*)"',
        ]
    )
    + r"\s*\Z"
)


def access_fields(logger, name, event_dict):
    """Split gunicorn access lines into structured fields; leave other records alone."""
    if event_dict.get("logger") != "gunicorn.access":
        return event_dict

    m = ACCESS_LINE.match(event_dict.get("event", ""))
    if not m:
        return event_dict

    fields = m.groupdict()
    for key in ("user", "referer"):
        if fields.get(key) == "-":
            fields[key] = None
    fields["status"] = int(fields["status"])
    fields["size"] = int(fields["size"]) if fields["size"].isdigit() else 0

    request_line = fields.pop("request", "")
    parts = request_line.split(" ")
    if len(parts) == 3:
        event_dict["method"], event_dict["path"], event_dict["version"] = parts
    else:
        event_dict["request_raw"] = request_line

    event_dict.update(fields)
    event_dict["event"] = "gunicorn.request_handling"
    return event_dict


logconfig_dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "root": {"level": "INFO", "handlers": ["default"]},
    "loggers": {
        "gunicorn.error": {"level": "INFO", "handlers": ["default"], "propagate": False},
        "gunicorn.access": {"level": "INFO", "handlers": ["default"], "propagate": False},
    },
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "logfmt_formatter",
        },
    },
    "formatters": {
        "logfmt_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.LogfmtRenderer(),
            "foreign_pre_chain": [*pre_chain, access_fields],
        }
    },
}

logging.config.dictConfig(logconfig_dict)
