from media_grabber.cli import app

if __name__ == "__main__":
    app()
