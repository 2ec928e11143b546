"""
Configuration for GridWorld Q-Learning vs DQN
=============================================
"""

# Environment Configuration
ENV_CONFIG = {
    "size": 8,                     # 8x8 grid, start (0,0), goal (7,7)
}

# Tabular Q-Learning Hyperparameters
QLEARNING_CONFIG = {
    "learning_rate": 0.1,          # Alpha
    "discount_factor": 0.99,       # Gamma
    "epsilon": 0.5,                # Initial exploration rate
    "epsilon_decay": 0.995,        # Multiplier per episode
    "epsilon_min": 0.01,           # Minimum epsilon
}

# DQN Hyperparameters
DQN_CONFIG = {
    "learning_rate": 0.001,        # Step size for the hand-written backward pass
    "discount_factor": 0.99,       # Gamma
    "epsilon": 1.0,                # Initial exploration rate
    "epsilon_decay": 0.995,        # Multiplier per episode
    "epsilon_min": 0.01,           # Minimum epsilon
    "batch_size": 32,              # Replay sample size per step
    "replay_size": 10_000,         # Replay buffer capacity
    "target_update_steps": 100,    # Steps between target network syncs
    "layer_sizes": (4, 16, 16, 4), # Input -> hidden -> hidden -> Q per action
    "normalization": 8.0,          # State-encoding divisor (matches size=8)
}

# Training Configuration
TRAIN_CONFIG = {
    "qlearning_episodes": 2000,    # Episodes for the tabular agent
    "dqn_episodes": 1000,          # Episodes for DQN on its own
    "compare_dqn_episodes": 5000,  # Episodes for DQN in the side-by-side run
    "max_steps": 200,              # Step ceiling per training episode
    "log_interval": 100,           # Print stats every N episodes
    "reward_window": 100,          # Moving-average window
    "sync_log_interval": 1000,     # Report target syncs every N steps
}

# Evaluation Configuration
EVAL_CONFIG = {
    "n_episodes": 10,              # Greedy test episodes
    "max_steps": 20,               # Step ceiling per test episode
}
