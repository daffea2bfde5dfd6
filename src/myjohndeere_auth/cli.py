import typer
import uvicorn

app = typer.Typer(help="MyJohnDeere Auth CLI")


@app.command()
def run(
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False,
) -> None:
    """
    Run the FastAPI server
    """
    uvicorn.run(
        "myjohndeere_auth.main:app",
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def endpoints(
    platform_url: str | None = typer.Option(None, help="API platform base URL"),
) -> None:
    """
    Print the MyJohnDeere endpoints a strategy resolves to
    """
    from myjohndeere_auth.auth_strategies.oauth import MyJohnDeereStrategy

    strategy = MyJohnDeereStrategy(
        {"platform_url": platform_url}, verify=lambda token, secret, profile: profile
    )
    options = strategy.options
    typer.echo(f"request_token_url:      {options.request_token_url}")
    typer.echo(f"access_token_url:       {options.access_token_url}")
    typer.echo(f"user_authorization_url: {options.user_authorization_url}")
    typer.echo(f"user_profile_url:       {strategy.user_profile_url}")


if __name__ == "__main__":
    app()
