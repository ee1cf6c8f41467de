"""Request and response models. The envelope lives in base, card shapes in card."""
