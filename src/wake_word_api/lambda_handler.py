"""Lambda handler for the Wake Word Training Data API using Mangum."""
from mangum import Mangum

from wake_word_api.config.settings import get_settings
from wake_word_api.main import create_app

# Create FastAPI app
app = create_app(get_settings())

# Wrap with Mangum for Lambda compatibility
handler = Mangum(app, lifespan="off")

# Export handler for Lambda runtime
lambda_handler = handler
