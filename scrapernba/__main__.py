"""
Entry point for python -m scrapernba
"""

if __name__ == '__main__':
    from scrapernba.cli import cli
    cli()
