"""Training components: network, replay buffer, state encoder, episode loops and evaluation."""
