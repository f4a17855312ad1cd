from esg_risk_core.core.pipeline import CompliancePipeline, DeliveryFailure, PipelineReport

__all__ = ["CompliancePipeline", "DeliveryFailure", "PipelineReport"]
