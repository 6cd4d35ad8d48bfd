from site_cache.cli import cli

if __name__ == "__main__":
    cli()
