import typer
import logging
import sys
from compactl.commands import apply, plan
from compactl.logging import setup_logging

app = typer.Typer(help="Add and delete cluster components implied by configuration changes.")

# Global debug flag
debug_mode = False

# Add all command groups
app.add_typer(plan.app, name="plan")
app.add_typer(apply.app, name="apply")

@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
):
    """Run the planning HTTP API."""
    import uvicorn
    uvicorn.run("compactl.api.main:app", host=host, port=port)

# Global options callback
@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """compactl - component actions driven by configuration changes."""
    global debug_mode
    debug_mode = debug
    setup_logging(debug)
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Debug mode enabled")

if __name__ == "__main__":
    try:
        app()
    except Exception as e:
        if debug_mode:
            import traceback
            logging.error(f"Unhandled exception: {e}\n{traceback.format_exc()}")
        else:
            logging.error(f"Error: {e}")
        sys.exit(1)
