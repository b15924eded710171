# sample.py

# Small demo snapshot used by the viewers when no file is given

SAMPLE_SNAPSHOT = {
    "nodes": [
        {"id": "ml", "name": "Machine Learning", "type": "concept"},
        {"id": "dl", "name": "Deep Learning", "type": "concept"},
        {"id": "nn", "name": "Neural Network", "type": "concept"},
        {"id": "cnn", "name": "CNN", "type": "algorithm"},
        {"id": "rnn", "name": "RNN", "type": "algorithm"},
        {"id": "transformer", "name": "Transformer", "type": "algorithm"},
        {"id": "bp", "name": "Backpropagation", "type": "method"},
        {"id": "gd", "name": "Gradient Descent", "type": "method"},
        {"id": "cv", "name": "Computer Vision", "type": "application"},
        {"id": "nlp", "name": "NLP", "type": "application"},
        {"id": "pytorch", "name": "PyTorch", "type": "tool"},
        {"id": "tf", "name": "TensorFlow", "type": "tool"},
        {"id": "hinton", "name": "Geoffrey Hinton", "type": "person"},
        {"id": "lecun", "name": "Yann LeCun", "type": "person"},
        {"id": "svm", "name": "SVM", "type": "algorithm"},
        {"id": "kernel", "name": "Kernel Trick", "type": "method"},
        {"id": "turing", "name": "Alan Turing", "type": "person"},
        {"id": "stats", "name": "Statistics"},
    ],
    "edges": [
        {"sourceId": "dl", "targetId": "ml", "type": "subfield_of"},
        {"sourceId": "nn", "targetId": "dl", "type": "foundation_of"},
        {"sourceId": "cnn", "targetId": "nn", "type": "is_a"},
        {"sourceId": "rnn", "targetId": "nn", "type": "is_a"},
        {"sourceId": "transformer", "targetId": "nn", "type": "is_a"},
        {"sourceId": "bp", "targetId": "nn", "type": "trains"},
        {"sourceId": "gd", "targetId": "bp", "type": "used_by"},
        {"sourceId": "cnn", "targetId": "cv", "type": "applied_to"},
        {"sourceId": "rnn", "targetId": "nlp", "type": "applied_to"},
        {"sourceId": "transformer", "targetId": "nlp", "type": "applied_to"},
        {"sourceId": "pytorch", "targetId": "dl", "type": "implements"},
        {"sourceId": "tf", "targetId": "dl", "type": "implements"},
        {"sourceId": "hinton", "targetId": "bp", "type": "popularized"},
        {"sourceId": "lecun", "targetId": "cnn", "type": "invented"},
        {"sourceId": "svm", "targetId": "ml", "type": "is_a"},
        {"sourceId": "kernel", "targetId": "svm", "type": "used_by"},
        {"sourceId": "turing", "targetId": "stats"},
    ],
}
