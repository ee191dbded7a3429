"""Run the CloudFormation CLI with ``python -m aws_cf``."""

from .cli import main

if __name__ == "__main__":
    main()
