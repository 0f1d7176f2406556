"""Campaign dashboard entrypoint."""

from __future__ import annotations

from campaign_dashboard.application.report_service import run_reporting_pipeline


def main() -> None:
    run_reporting_pipeline()


if __name__ == "__main__":
    main()
