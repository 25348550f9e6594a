from app import create_app, celery  # noqa: F401


app = create_app()


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=3001, debug=True)
