from taskboard.api.http.app import create_app

# uvicorn taskboard.main:app
app = create_app()
