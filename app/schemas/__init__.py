from app.schemas.menus import MenusResponse, TriggerResponse

__all__ = ["MenusResponse", "TriggerResponse"]
