"""
Azure Functions App Entry Point
================================
This module serves as the main entry point for Azure Functions.
The actual business logic is organized in the training_webhook package.
"""

import azure.functions as func
from training_webhook import training_log_webhook as training_webhook_handler

# Initialize Azure Functions app
app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


@app.route(route="training_webhook", methods=["POST"])
def training_webhook(req: func.HttpRequest) -> func.HttpResponse:
    """
    Webhook endpoint to receive chat messages with a workout log.

    This is the main entry point that delegates to the training_webhook handler.

    Accepts the chat platform's JSON payload; the message text is read from
    events[0].message.text, e.g.:

        Chest day
        Bench press 50kg 10回
        Dumbbell fly 12kg 15回

    Returns:
        JSON response with a message and the Notion response or error
    """
    return training_webhook_handler(req)
