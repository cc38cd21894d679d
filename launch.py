"""Cross-platform launcher for the Investigation Board viewer."""

import sys


def check_python():
    """Check the interpreter version."""
    version = sys.version_info
    if version.major < 3 or (version.major == 3 and version.minor < 10):
        print("[ERROR] Python 3.10+ required")
        print(f"Current version: {version.major}.{version.minor}.{version.micro}")
        return False
    print(f"[OK] Python {version.major}.{version.minor}.{version.micro}")
    return True


def check_dependencies():
    """Check if required dependencies are installed."""
    required_modules = [
        ("PySide6", "PySide6"),
        ("numpy", "numpy"),
        ("pydantic", "pydantic"),
        ("pydantic-settings", "pydantic_settings"),
        ("PyYAML", "yaml"),
    ]

    missing = []
    for display_name, import_name in required_modules:
        try:
            __import__(import_name)
        except ImportError:
            missing.append(display_name)

    if missing:
        print(f"[WARNING] Missing dependencies: {', '.join(missing)}")
        print("  Install with: pip install -e .")
        return False

    print("[OK] Dependencies installed")
    return True


def main():
    """Main launcher entry point."""
    print("=" * 60)
    print("Investigation Board")
    print("=" * 60)
    print()

    if not check_python():
        sys.exit(1)

    if not check_dependencies():
        sys.exit(1)
    print()

    try:
        from case_board.ui.main import main as ui_main

        ui_main(sys.argv[1:])
    except KeyboardInterrupt:
        print("\n\nApplication closed by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
