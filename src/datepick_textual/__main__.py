"""Entry point for datepick-textual."""

from datepick_textual.app import PickerDemoApp
from datepick_textual.config import parse_args, resolve_settings


def main() -> None:
    """Run the picker demo application."""
    args = parse_args()
    settings = resolve_settings(args)
    app = PickerDemoApp(settings)
    app.run()


if __name__ == "__main__":
    main()
