from mangum import Mangum

from chat_backend.config import get_settings
from chat_backend.main import app

# ASGI handler for serverless deployment
handler = Mangum(app, lifespan="auto")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
