"""
Main entry point for running the function host API server.
"""
import argparse
import os
import uvicorn

from function_host_core.core.config import ConfigLoader
from scripts.logging_setup import setup_logging

def main():
    parser = argparse.ArgumentParser(description="Run the function host API server.")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML service configuration file.")
    parser.add_argument("--functions-path", type=str, default=None, help="Registry root; overrides the config file.")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host to bind the server to.")
    parser.add_argument("--port", type=int, default=8000, help="Port to run the server on.")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reloading for development.")
    parser.add_argument("--verbose", action="store_true", help="Log at INFO level instead of WARNING.")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    # Validate early so a bad config fails before uvicorn starts; the factory
    # re-reads the same sources, including under --reload.
    config = ConfigLoader(args.config).load(functions_path=args.functions_path)
    if args.config:
        os.environ["FNHOST_CONFIG"] = args.config
    os.environ["FNHOST_FUNCTIONS_PATH"] = str(config.functions_path)

    uvicorn.run(
        "function_host_core.api.main:create_app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        factory=True,
    )

if __name__ == "__main__":
    main()
