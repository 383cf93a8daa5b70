"""Services for Shotmaker."""

from shotmaker.services.image_generator import ImageGenerator
from shotmaker.services.generation_client import GenerationClient
from shotmaker.services.shot_editor import ShotEditor
from shotmaker.services.export_simulator import ExportSimulation
from shotmaker.services.wizard import WizardController

__all__ = [
    "ImageGenerator",
    "GenerationClient",
    "ShotEditor",
    "ExportSimulation",
    "WizardController",
]
