#!/usr/bin/env python3
"""
Micro Breaks - Run Script
Starts the FastAPI tool server, and optionally the Streamlit map widget.

    python run.py                # tool server only
    python run.py --with-widget  # tool server + widget on :8501
"""

import argparse
import os
import sys
import subprocess
import socket
from pathlib import Path

WIDGET_APP = Path(__file__).resolve().parent.parent / "frontend" / "app.py"

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def check_port_free(host, port):
    """Return True when nothing is listening on host:port"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(2)
    result = sock.connect_ex((host, port))
    sock.close()
    return result != 0

def check_dependencies(with_widget):
    print_colored("🔍 Checking dependencies...", "blue")
    try:
        import fastapi
        import uvicorn
        import httpx
        import mcp
        if with_widget:
            import streamlit
    except ImportError as e:
        print_colored(f"❌ Missing dependency: {e.name}", "red")
        print("Install them from the project root with:")
        print("  pip install -e .[widget]" if with_widget else "  pip install -e .")
        sys.exit(1)

def start_widget(port):
    """Launch the Streamlit widget in the background, pointed at this server."""
    check_file_exists(WIDGET_APP, f"{WIDGET_APP} not found.")
    env = dict(os.environ, BACKEND_URL=f"http://localhost:{port}")
    print_colored("🗺️  Starting map widget on http://localhost:8501", "blue")
    return subprocess.Popen(
        [sys.executable, "-m", "streamlit", "run", str(WIDGET_APP)],
        env=env
    )

def main():
    parser = argparse.ArgumentParser(description="Run the Micro Breaks tool server")
    parser.add_argument("--with-widget", action="store_true", help="also start the Streamlit map widget")
    args = parser.parse_args()

    print_colored("🚀 Starting Micro Breaks tool server...", "blue")

    check_file_exists("microbreaks/main.py", "microbreaks/main.py not found. Please run this script from the backend directory.")

    if not Path(".env").exists() and not Path("../.env").exists():
        print_colored("⚠️  No .env file found, using defaults.", "yellow")
        print("Optional variables:")
        print("  PORT=3000")
        print("  OVERPASS_URL=https://overpass-api.de/api/interpreter")
        print("  LOGGER=20")

    port = int(os.environ.get("PORT", "3000"))
    if not check_port_free("localhost", port):
        print_colored(f"❌ Port {port} is already in use. Set PORT to another value.", "red")
        sys.exit(1)

    check_dependencies(args.with_widget)

    print_colored("✅ All checks passed!", "green")
    print(f"📍 Tool endpoint (streamable HTTP): http://localhost:{port}/mcp")
    print(f"📍 Tool endpoint (SSE): http://localhost:{port}/sse")
    print(f"📍 Widget data: http://localhost:{port}/widget/data")
    print(f"📍 API Documentation: http://localhost:{port}/docs")
    print()
    print("Press Ctrl+C to stop")
    print()

    widget = start_widget(port) if args.with_widget else None
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "microbreaks.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", str(port)
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)
    finally:
        if widget is not None:
            widget.terminate()

if __name__ == "__main__":
    main()
