"""Core conversion from the legacy metric model to the target model."""
