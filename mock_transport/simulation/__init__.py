from mock_transport.simulation.model import SimulationConfig, SimulationModel

__all__ = ["SimulationConfig", "SimulationModel"]
