"""Watch Submit -- watch a file and paste its contents into a browser form.

Core modules:
    config     -- Configuration via pydantic-settings (WATCH_SUBMIT_* env vars).
                  CLI flags passed as kwargs to WatchConfig (no env pollution).
    cli        -- Click CLI entry point. Missing path is a usage error.
    notifier   -- watchdog-based change notifier feeding a capacity-1 channel.
                  Signals raised while one is pending are dropped.
    loop       -- Consumer loop: settle delay, file read, automation run.
                  Per-event errors are logged and the loop keeps going.
    automation -- Selenium session attached to a running Chrome through its
                  remote-debugging address. Fresh session per run.
    errors     -- Exception hierarchy (startup vs per-event errors)
    models     -- Automation steps and run outcome enums
"""
